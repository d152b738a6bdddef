from busprobe import (BusConnection, MediaPlayer, PlaybackStatus, RemoteError, WaitStrategy,
                      fetch_property, list_media_player_names)

from dbus_next.aio import MessageBus
from dbus_next.service import ServiceInterface, dbus_property, PropertyAccess
from dbus_next import Variant

import os
import pytest

pytestmark = pytest.mark.skipif(not os.environ.get('DBUS_SESSION_BUS_ADDRESS'),
                                reason='integration tests need a session bus')

PLAYER_NAME = 'org.mpris.MediaPlayer2.busprobetest'


class ExamplePlayer(ServiceInterface):
    def __init__(self):
        super().__init__('org.mpris.MediaPlayer2.Player')
        self._position = 123456789

    @dbus_property(access=PropertyAccess.READ)
    def PlaybackStatus(self) -> 's':
        return 'Playing'

    @dbus_property(access=PropertyAccess.READ)
    def Metadata(self) -> 'a{sv}':
        return {
            'mpris:trackid': Variant('o', '/org/mpris/MediaPlayer2/Track/1'),
            'mpris:length': Variant('x', 215000000),
            'xesam:title': Variant('s', 'Song'),
        }

    @dbus_property(access=PropertyAccess.READ)
    def Position(self) -> 'x':
        return self._position

    @dbus_property(access=PropertyAccess.READ)
    def CanGoNext(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanGoPrevious(self) -> 'b':
        return False

    @dbus_property(access=PropertyAccess.READ)
    def CanPlay(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanPause(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanSeek(self) -> 'b':
        return True

    @dbus_property(access=PropertyAccess.READ)
    def CanControl(self) -> 'b':
        return True


async def export_player():
    service_bus = await MessageBus().connect()
    service_bus.export('/org/mpris/MediaPlayer2', ExamplePlayer())
    await service_bus.request_name(PLAYER_NAME)
    return service_bus


@pytest.mark.asyncio
async def test_list_media_player_names():
    service_bus = await export_player()

    async with BusConnection() as connection:
        await connection.request_name('user.BarScripts.busprobetest')
        names = list(await list_media_player_names(connection))

    service_bus.disconnect()

    assert PLAYER_NAME in names
    assert all(name.startswith('org.mpris.MediaPlayer2.') for name in names)


@pytest.mark.asyncio
@pytest.mark.parametrize('strategy', [WaitStrategy.AWAIT, WaitStrategy.POLL])
async def test_fetch_position(strategy):
    service_bus = await export_player()

    async with BusConnection() as connection:
        position = await fetch_property(connection,
                                        PLAYER_NAME,
                                        '/org/mpris/MediaPlayer2',
                                        'org.mpris.MediaPlayer2.Player',
                                        'Position',
                                        strategy=strategy)

    service_bus.disconnect()

    assert position == 123456789


@pytest.mark.asyncio
async def test_media_player():
    service_bus = await export_player()

    async with BusConnection() as connection:
        player = MediaPlayer(connection, PLAYER_NAME)
        assert await player.playback_status() is PlaybackStatus.PLAYING

        properties = await player.properties()
        assert properties.metadata.title == 'Song'
        assert properties.can_go_previous is False

        with pytest.raises(RemoteError):
            await player.get('DoesNotExist')

    service_bus.disconnect()


@pytest.mark.asyncio
async def test_service_unknown():
    async with BusConnection() as connection:
        with pytest.raises(RemoteError) as e:
            await fetch_property(connection, 'org.mpris.MediaPlayer2.busprobe.missing',
                                 '/org/mpris/MediaPlayer2', 'org.mpris.MediaPlayer2.Player',
                                 'Position')

    assert e.value.type == 'org.freedesktop.DBus.Error.ServiceUnknown'
