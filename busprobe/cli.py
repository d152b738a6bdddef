"""Console entry points. None of them take arguments.

Exit status is 0 on success and 1 on any fatal error. An error reply from
the bus is reported on stdout, every other failure on stderr.
"""
from .connection import BusConnection
from .constants import (CLIENT_BUS_NAME, DEFAULT_PLAYER, MPRIS_BUS_PREFIX, MPRIS_OBJECT_PATH,
                        MPRIS_PLAYER_INTERFACE, LOG_LEVEL_ENV, ExitStatus)
from .errors import BusProbeError, RemoteError
from .mpris import MediaPlayer
from .names import list_media_player_names
from .properties import fetch_property

import asyncio
import logging
import os
import sys


async def print_media_player_names(connection, client_name=CLIENT_BUS_NAME, prefix=MPRIS_BUS_PREFIX):
    await connection.request_name(client_name)
    for name in await list_media_player_names(connection, prefix):
        print(name)


async def print_position(connection, service=DEFAULT_PLAYER):
    print(await fetch_property(connection, service, MPRIS_OBJECT_PATH, MPRIS_PLAYER_INTERFACE,
                               'Position'))


async def print_playback_status(connection, service=DEFAULT_PLAYER):
    status = await MediaPlayer(connection, service).playback_status()
    print(status.value)


def run(flow, connection=None) -> ExitStatus:
    """Run ``flow(connection)`` on a fresh connection and map the outcome to
    an exit status."""
    async def main():
        async with connection or BusConnection() as conn:
            await flow(conn)

    try:
        asyncio.run(main())
    except RemoteError as e:
        print(f'Error sending message: ({e.type})')
        return ExitStatus.FAILURE
    except BusProbeError as e:
        print(f'{type(e).__name__}: {e}', file=sys.stderr)
        return ExitStatus.FAILURE

    return ExitStatus.SUCCESS


def _setup_logging():
    logging.basicConfig(level=os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper(),
                        format='%(levelname)s: %(message)s')


def list_names_main():
    _setup_logging()
    sys.exit(run(print_media_player_names).value)


def position_main():
    _setup_logging()
    sys.exit(run(print_position).value)


def status_main():
    _setup_logging()
    sys.exit(run(print_playback_status).value)
