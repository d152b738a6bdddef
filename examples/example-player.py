#!/usr/bin/env python3
import sys
import os
sys.path.append(os.path.abspath(os.path.dirname(__file__) + '/..'))

from busprobe import MPRIS_OBJECT_PATH, MPRIS_PLAYER_INTERFACE
from dbus_next.service import ServiceInterface, dbus_property, PropertyAccess
from dbus_next.aio import MessageBus
from dbus_next import Variant

import asyncio
import time


class ExamplePlayer(ServiceInterface):
    """A player that is always playing the same track, for trying out the
    busprobe commands without a real media player."""
    def __init__(self):
        super().__init__(MPRIS_PLAYER_INTERFACE)
        self._started = time.monotonic()

    @dbus_property(access=PropertyAccess.READ)
    def PlaybackStatus(self) -> 's':
        return 'Playing'

    @dbus_property(access=PropertyAccess.READ)
    def Metadata(self) -> 'a{sv}':
        return {
            'mpris:trackid': Variant('o', '/org/mpris/MediaPlayer2/Track/1'),
            'mpris:length': Variant('x', 215000000),
            'xesam:title': Variant('s', 'Example Track'),
            'xesam:artist': Variant('as', ['busprobe']),
        }

    @dbus_property(access=PropertyAccess.READ)
    def Position(self) -> 'x':
        return int((time.monotonic() - self._started) * 1_000_000) % 215000000

    @dbus_property(access=PropertyAccess.READ)
    def CanGoNext(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def CanGoPrevious(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def CanPlay(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanPause(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def CanSeek(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def CanControl(self) -> 'b':
        return False


async def main():
    name = 'org.mpris.MediaPlayer2.spotify'

    bus = await MessageBus().connect()
    bus.export(MPRIS_OBJECT_PATH, ExamplePlayer())
    await bus.request_name(name)
    print(f'player up on name: "{name}", path: "{MPRIS_OBJECT_PATH}"')
    await asyncio.get_running_loop().create_future()


asyncio.run(main())
