#!/usr/bin/env python3
import sys
import os
sys.path.append(os.path.abspath(os.path.dirname(__file__) + '/..'))

from busprobe import BusConnection, list_bus_names, filter_bus_names

import asyncio
import json


async def main():
    async with BusConnection() as connection:
        names = await list_bus_names(connection)

    print(json.dumps({
        'players': list(filter_bus_names(names)),
        'others': [name for name in names if not name.startswith(':')],
    }, indent=2))


asyncio.run(main())
