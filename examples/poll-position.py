#!/usr/bin/env python3
import sys
import os
sys.path.append(os.path.abspath(os.path.dirname(__file__) + '/..'))

from busprobe import (BusConnection, BusProbeError, Timestamp, WaitStrategy, fetch_property,
                      list_media_player_names, MPRIS_OBJECT_PATH, MPRIS_PLAYER_INTERFACE)

import asyncio


async def main():
    async with BusConnection() as connection:
        for name in await list_media_player_names(connection):
            try:
                position = await fetch_property(connection,
                                                name,
                                                MPRIS_OBJECT_PATH,
                                                MPRIS_PLAYER_INTERFACE,
                                                'Position',
                                                strategy=WaitStrategy.POLL)
            except BusProbeError as e:
                print(f'{name}: {e}')
                continue

            print(f'{name}: {Timestamp.from_microseconds(max(position, 0))}')


asyncio.run(main())
