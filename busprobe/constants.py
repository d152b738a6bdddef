from enum import Enum

BUS_DAEMON_NAME = 'org.freedesktop.DBus'
BUS_DAEMON_PATH = '/org/freedesktop/DBus'
BUS_DAEMON_INTERFACE = 'org.freedesktop.DBus'
PROPERTIES_INTERFACE = 'org.freedesktop.DBus.Properties'

MPRIS_BUS_PREFIX = 'org.mpris.MediaPlayer2.'
MPRIS_OBJECT_PATH = '/org/mpris/MediaPlayer2'
MPRIS_PLAYER_INTERFACE = 'org.mpris.MediaPlayer2.Player'
DEFAULT_PLAYER = 'org.mpris.MediaPlayer2.spotify'

# well-known name claimed by the name lister
CLIENT_BUS_NAME = 'user.BarScripts'

# seconds, same as the libdbus default reply timeout
DEFAULT_REPLY_TIMEOUT = 25.0
DEFAULT_POLL_INTERVAL = 0.2

LOG_LEVEL_ENV = 'BUSPROBE_LOG_LEVEL'


class WaitStrategy(Enum):
    """How a caller waits for a :class:`PendingReply
    <busprobe.PendingReply>` to complete.

    :cvar AWAIT: Suspend on the completion future.
    :cvar POLL: Check the completion flag on a fixed interval.
    """
    AWAIT = 'await'
    POLL = 'poll'


class ExitStatus(Enum):
    SUCCESS = 0
    FAILURE = 1


class PlaybackStatus(Enum):
    PLAYING = 'Playing'
    PAUSED = 'Paused'
    STOPPED = 'Stopped'


class LoopStatus(Enum):
    NONE = 'None'
    TRACK = 'Track'
    PLAYLIST = 'Playlist'
