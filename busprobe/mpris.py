"""Typed views of the MPRIS ``org.mpris.MediaPlayer2.Player`` interface.

See https://specifications.freedesktop.org/mpris-spec/latest/Player_Interface.html
"""
from .constants import (MPRIS_OBJECT_PATH, MPRIS_PLAYER_INTERFACE, PlaybackStatus, LoopStatus,
                        WaitStrategy, DEFAULT_POLL_INTERVAL)
from .errors import ProtocolViolationError
from .message import unwrap_variant
from .properties import fetch_property, get_all_properties

from dbus_next import Variant

from typing import Dict, Optional


class Timestamp:
    """A duration split into hours, minutes and seconds."""
    def __init__(self, hours: int = 0, minutes: int = 0, seconds: int = 0):
        self.hours = hours
        self.minutes = minutes
        self.seconds = seconds

    @classmethod
    def from_seconds(cls, seconds: int) -> 'Timestamp':
        if seconds < 0:
            raise ValueError(f'a timestamp cannot be negative: {seconds}')
        return cls(seconds // 3600, seconds // 60 % 60, seconds % 60)

    @classmethod
    def from_microseconds(cls, microseconds: int) -> 'Timestamp':
        return cls.from_seconds(microseconds // 1_000_000)

    def to_dict(self) -> Dict[str, int]:
        return {'h': self.hours, 'm': self.minutes, 's': self.seconds}

    def __str__(self):
        return f'{self.hours:02}:{self.minutes:02}:{self.seconds:02}'

    def __eq__(self, other):
        if type(other) is not Timestamp:
            return NotImplemented
        return self.to_dict() == other.to_dict()


class Metadata:
    """The ``Metadata`` map of a player.

    Only ``mpris:trackid`` must be present. Every other field is
    :class:`None` when the player does not report it.
    """

    # attribute -> (map key, signature)
    _fields = {
        'trackid': ('mpris:trackid', 'o'),
        'length': ('mpris:length', 'x'),
        'art_url': ('mpris:artUrl', 's'),
        'album': ('xesam:album', 's'),
        'album_artist': ('xesam:albumArtist', 'as'),
        'artist': ('xesam:artist', 'as'),
        'as_text': ('xesam:asText', 's'),
        'audio_bpm': ('xesam:audioBPM', 'i'),
        'auto_rating': ('xesam:autoRating', 'd'),
        'comment': ('xesam:comment', 'as'),
        'composer': ('xesam:composer', 'as'),
        'content_created': ('xesam:contentCreated', 's'),
        'disc_number': ('xesam:discNumber', 'i'),
        'first_used': ('xesam:firstUsed', 's'),
        'genre': ('xesam:genre', 'as'),
        'last_used': ('xesam:lastUsed', 's'),
        'lyricist': ('xesam:lyricist', 'as'),
        'title': ('xesam:title', 's'),
        'track_number': ('xesam:trackNumber', 'i'),
        'url': ('xesam:url', 's'),
        'use_count': ('xesam:useCount', 'i'),
        'user_rating': ('xesam:userRating', 'd'),
    }

    def __init__(self, trackid: str = '', **kwargs):
        self.trackid = trackid
        for attr in self._fields:
            if attr != 'trackid':
                setattr(self, attr, kwargs.pop(attr, None))

        if kwargs:
            raise TypeError(f'unknown metadata fields: {", ".join(kwargs)}')

    @classmethod
    def from_variants(cls, metadata: Dict[str, Variant]) -> 'Metadata':
        values = {}
        for attr, (key, signature) in cls._fields.items():
            if key not in metadata:
                continue
            variant = metadata[key]
            # some players send the track id as a plain string
            if attr == 'trackid' and type(variant) is Variant and variant.signature == 's':
                signature = 's'
            values[attr] = unwrap_variant(variant, signature)

        if 'trackid' not in values:
            raise ProtocolViolationError('metadata is missing "mpris:trackid"')

        return cls(**values)

    def __repr__(self):
        fields = ', '.join(f'{attr}={getattr(self, attr)!r}' for attr in self._fields
                           if getattr(self, attr) is not None)
        return f'Metadata({fields})'


class PlayerProperties:
    """The properties of ``org.mpris.MediaPlayer2.Player`` as returned by
    ``GetAll``."""

    # attribute -> (property name, signature, required)
    _fields = {
        'playback_status': ('PlaybackStatus', 's', True),
        'loop_status': ('LoopStatus', 's', False),
        'rate': ('Rate', 'd', False),
        'shuffle': ('Shuffle', 'b', False),
        'metadata': ('Metadata', 'a{sv}', True),
        'volume': ('Volume', 'd', False),
        'position': ('Position', 'x', True),
        'minimum_rate': ('MinimumRate', 'd', False),
        'maximum_rate': ('MaximumRate', 'd', False),
        'can_go_next': ('CanGoNext', 'b', True),
        'can_go_previous': ('CanGoPrevious', 'b', True),
        'can_play': ('CanPlay', 'b', True),
        'can_pause': ('CanPause', 'b', True),
        'can_seek': ('CanSeek', 'b', True),
        'can_control': ('CanControl', 'b', True),
    }

    def __init__(self, **kwargs):
        for attr in self._fields:
            setattr(self, attr, kwargs.pop(attr, None))

        if kwargs:
            raise TypeError(f'unknown player properties: {", ".join(kwargs)}')

    @classmethod
    def from_variants(cls, properties: Dict[str, Variant]) -> 'PlayerProperties':
        values = {}
        for attr, (name, signature, required) in cls._fields.items():
            if name not in properties:
                if required:
                    raise ProtocolViolationError(f'player did not report "{name}"')
                continue
            values[attr] = unwrap_variant(properties[name], signature)

        try:
            values['playback_status'] = PlaybackStatus(values['playback_status'])
            if 'loop_status' in values:
                values['loop_status'] = LoopStatus(values['loop_status'])
        except ValueError as e:
            raise ProtocolViolationError(str(e)) from e

        values['metadata'] = Metadata.from_variants(values['metadata'])

        return cls(**values)

    @property
    def position_timestamp(self) -> Timestamp:
        return Timestamp.from_microseconds(max(self.position, 0))


class MediaPlayer:
    """A media player on the bus, reached by its bus name.

    :param connection: A connected :class:`BusConnection <busprobe.BusConnection>`.
    :param bus_name: The name of the player, for instance
        ``org.mpris.MediaPlayer2.spotify``.
    :type bus_name: str
    """
    def __init__(self,
                 connection,
                 bus_name: str,
                 strategy: WaitStrategy = WaitStrategy.AWAIT,
                 poll_interval: float = DEFAULT_POLL_INTERVAL):
        self.connection = connection
        self.bus_name = bus_name
        self.strategy = strategy
        self.poll_interval = poll_interval

    async def get(self, property_name: str, signature: Optional[str] = None):
        return await fetch_property(self.connection,
                                    self.bus_name,
                                    MPRIS_OBJECT_PATH,
                                    MPRIS_PLAYER_INTERFACE,
                                    property_name,
                                    signature=signature,
                                    strategy=self.strategy,
                                    poll_interval=self.poll_interval)

    async def position(self) -> int:
        """The position of the current track in microseconds."""
        return await self.get('Position', 'x')

    async def playback_status(self) -> PlaybackStatus:
        status = await self.get('PlaybackStatus', 's')
        try:
            return PlaybackStatus(status)
        except ValueError as e:
            raise ProtocolViolationError(str(e)) from e

    async def metadata(self) -> Metadata:
        return Metadata.from_variants(await self.get('Metadata', 'a{sv}'))

    async def properties(self) -> PlayerProperties:
        return PlayerProperties.from_variants(await get_all_properties(
            self.connection, self.bus_name, MPRIS_OBJECT_PATH, MPRIS_PLAYER_INTERFACE))

    def __repr__(self):
        return f'MediaPlayer({self.bus_name!r})'
