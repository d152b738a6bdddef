from .constants import BUS_DAEMON_NAME, BUS_DAEMON_PATH, BUS_DAEMON_INTERFACE, MPRIS_BUS_PREFIX
from .errors import ProtocolViolationError
from .message import new_method_call, check_method_return

from typing import Iterable, Iterator, List


def filter_bus_names(names: Iterable[str], prefix: str = MPRIS_BUS_PREFIX) -> Iterator[str]:
    """Yield the names that start with ``prefix``, keeping their order."""
    for name in names:
        if name.startswith(prefix):
            yield name


async def list_bus_names(connection) -> List[str]:
    """Get every name currently owned on the bus from the bus daemon.

    The order is whatever the bus daemon returns.

    :raises:
        - :class:`RemoteError <busprobe.RemoteError>` - If the bus daemon \
          replied with an error.
        - :class:`ProtocolViolationError <busprobe.ProtocolViolationError>` - \
          If the reply is not a list of strings.
    """
    reply = await connection.call(
        new_method_call(BUS_DAEMON_NAME, BUS_DAEMON_PATH, BUS_DAEMON_INTERFACE, 'ListNames'))

    check_method_return(reply, 'as')

    names = reply.body[0]
    if type(names) is not list or not all(type(name) is str for name in names):
        raise ProtocolViolationError('ListNames did not return a list of strings')

    return names


async def list_media_player_names(connection, prefix: str = MPRIS_BUS_PREFIX) -> Iterator[str]:
    """Get the names of the media players on the bus.

    :param connection: A connected :class:`BusConnection <busprobe.BusConnection>`.
    :param prefix: Names must start with this exact string to be returned.
    :type prefix: str

    :returns: A one-shot iterator over the matching names, in bus daemon order.
    """
    return filter_bus_names(await list_bus_names(connection), prefix)
