from busprobe import BusConnection, ExitStatus, cli

from dbus_next import NameFlag, RequestNameReply, Variant, ErrorType

import pytest


def test_list_names(bus, connection, capsys):
    bus.reply_with('ListNames', 'as', [[
        'org.mpris.MediaPlayer2.vlc',
        'org.freedesktop.Notifications',
        'org.mpris.MediaPlayer2.spotify',
    ]])

    status = cli.run(cli.print_media_player_names, connection)

    assert status is ExitStatus.SUCCESS
    assert capsys.readouterr().out == 'org.mpris.MediaPlayer2.vlc\norg.mpris.MediaPlayer2.spotify\n'
    assert bus.requested_names == [('user.BarScripts', NameFlag.REPLACE_EXISTING)]
    assert bus.disconnected


def test_list_names_empty(bus, connection, capsys):
    bus.reply_with('ListNames', 'as', [[]])

    assert cli.run(cli.print_media_player_names, connection) is ExitStatus.SUCCESS
    assert capsys.readouterr().out == ''


def test_list_names_name_taken(bus, connection, capsys):
    bus.request_name_reply = RequestNameReply.IN_QUEUE
    bus.reply_with('ListNames', 'as', [['org.mpris.MediaPlayer2.vlc']])

    assert cli.run(cli.print_media_player_names, connection) is ExitStatus.FAILURE

    out, err = capsys.readouterr()
    assert out == ''
    assert 'user.BarScripts' in err
    assert bus.sent == []
    assert bus.disconnected


def test_position(bus, connection, capsys):
    bus.reply_with('Get', 'v', [Variant('x', 123456789)])

    assert cli.run(cli.print_position, connection) is ExitStatus.SUCCESS
    assert capsys.readouterr().out == '123456789\n'

    [msg] = bus.sent
    assert msg.destination == 'org.mpris.MediaPlayer2.spotify'
    assert msg.body == ['org.mpris.MediaPlayer2.Player', 'Position']


def test_position_service_unknown(bus, connection, capsys):
    bus.error_with('Get', ErrorType.SERVICE_UNKNOWN.value, 'not provided by any .service files')

    assert cli.run(cli.print_position, connection) is ExitStatus.FAILURE

    out, err = capsys.readouterr()
    assert out == 'Error sending message: (org.freedesktop.DBus.Error.ServiceUnknown)\n'
    assert err == ''


def test_position_empty_reply(bus, connection, capsys):
    bus.reply_with('Get')

    assert cli.run(cli.print_position, connection) is ExitStatus.FAILURE

    out, err = capsys.readouterr()
    assert out == ''
    assert 'ProtocolViolationError' in err
    assert 'no arguments' in err


def test_position_no_reply(bus, capsys):
    bus.never_reply('Get')
    connection = BusConnection(bus=bus, reply_timeout=0.05)

    assert cli.run(cli.print_position, connection) is ExitStatus.FAILURE
    assert capsys.readouterr().out == 'Error sending message: (org.freedesktop.DBus.Error.NoReply)\n'


def test_status(bus, connection, capsys):
    bus.reply_with('Get', 'v', [Variant('s', 'Paused')])

    assert cli.run(cli.print_playback_status, connection) is ExitStatus.SUCCESS
    assert capsys.readouterr().out == 'Paused\n'


def test_connection_failure(bus, connection, capsys):
    bus.connect_error = ConnectionRefusedError('refused')

    assert cli.run(cli.print_position, connection) is ExitStatus.FAILURE
    assert 'BusConnectionError' in capsys.readouterr().err


@pytest.mark.parametrize('main, member, signature, body, output', [
    (cli.list_names_main, 'ListNames', 'as', [['org.mpris.MediaPlayer2.mpv']],
     'org.mpris.MediaPlayer2.mpv\n'),
    (cli.position_main, 'Get', 'v', [Variant('x', 7)], '7\n'),
    (cli.status_main, 'Get', 'v', [Variant('s', 'Stopped')], 'Stopped\n'),
])
def test_entry_points(bus, monkeypatch, capsys, main, member, signature, body, output):
    bus.reply_with(member, signature, body)
    monkeypatch.setattr(cli, 'BusConnection', lambda: BusConnection(bus=bus))

    with pytest.raises(SystemExit) as e:
        main()

    assert e.value.code == 0
    assert capsys.readouterr().out == output


def test_entry_point_failure(bus, monkeypatch, capsys):
    bus.error_with('Get', ErrorType.SERVICE_UNKNOWN.value)
    monkeypatch.setattr(cli, 'BusConnection', lambda: BusConnection(bus=bus))

    with pytest.raises(SystemExit) as e:
        cli.position_main()

    assert e.value.code == 1


def test_no_session_bus(monkeypatch, capsys):
    monkeypatch.delenv('DBUS_SESSION_BUS_ADDRESS', raising=False)
    monkeypatch.delenv('DISPLAY', raising=False)

    assert cli.run(cli.print_position) is ExitStatus.FAILURE

    out, err = capsys.readouterr()
    assert out == ''
    assert 'BusConnectionError' in err
