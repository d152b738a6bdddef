from . import names
from . import properties
from . import mpris
from .connection import BusConnection
from .constants import (WaitStrategy, ExitStatus, PlaybackStatus, LoopStatus, MPRIS_BUS_PREFIX,
                        MPRIS_OBJECT_PATH, MPRIS_PLAYER_INTERFACE, DEFAULT_PLAYER, CLIENT_BUS_NAME,
                        DEFAULT_REPLY_TIMEOUT, DEFAULT_POLL_INTERVAL)
from .errors import (BusProbeError, BusConnectionError, NameRequestError, InvalidRequestError,
                     ResourceExhaustedError, SendError, PendingReplyError, ProtocolViolationError,
                     RemoteError)
from .message import new_method_call, check_method_return, unwrap_variant
from .mpris import MediaPlayer, Metadata, PlayerProperties, Timestamp
from .names import filter_bus_names, list_bus_names, list_media_player_names
from .pending import PendingReply
from .properties import fetch_property, get_all_properties
