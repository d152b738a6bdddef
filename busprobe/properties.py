from .constants import PROPERTIES_INTERFACE, WaitStrategy, DEFAULT_POLL_INTERVAL
from .errors import ProtocolViolationError
from .message import new_method_call, check_method_return, unwrap_variant

from dbus_next import Variant

from typing import Any, Dict, Optional


async def fetch_property(connection,
                         service: str,
                         object_path: str,
                         interface: str,
                         property_name: str,
                         signature: Optional[str] = 'x',
                         strategy: WaitStrategy = WaitStrategy.AWAIT,
                         poll_interval: float = DEFAULT_POLL_INTERVAL,
                         timeout: Optional[float] = None) -> Any:
    """Read one property of an object with ``org.freedesktop.DBus.Properties.Get``.

    :param connection: A connected :class:`BusConnection <busprobe.BusConnection>`.
    :param service: The bus name that owns the object.
    :type service: str
    :param object_path: The path of the object.
    :type object_path: str
    :param interface: The interface the property belongs to.
    :type interface: str
    :param property_name: The name of the property.
    :type property_name: str
    :param signature: The type the property must have. Integer properties of
        another integer type are accepted if the value fits. :class:`None`
        accepts any type.
    :type signature: str
    :param strategy: How to wait for the reply.
    :type strategy: :class:`WaitStrategy <busprobe.WaitStrategy>`
    :param poll_interval: Seconds between completion checks when polling.
    :type poll_interval: float
    :param timeout: Seconds to wait for the reply. Defaults to the
        connection's reply timeout.
    :type timeout: float

    :returns: The unboxed property value.

    :raises:
        - :class:`RemoteError <busprobe.RemoteError>` - If the service or the \
          bus daemon replied with an error, including a reply timeout.
        - :class:`ProtocolViolationError <busprobe.ProtocolViolationError>` - \
          If the reply has no arguments or holds the wrong type.
    """
    msg = new_method_call(service, object_path, PROPERTIES_INTERFACE, 'Get', 'ss',
                          [interface, property_name])

    with connection.send_with_reply(msg, timeout) as pending:
        await pending.wait(strategy, poll_interval)
        reply = pending.steal_reply()

    check_method_return(reply, 'v')

    return unwrap_variant(reply.body[0], signature)


async def get_all_properties(connection,
                             service: str,
                             object_path: str,
                             interface: str,
                             timeout: Optional[float] = None) -> Dict[str, Variant]:
    """Read every property of an interface with
    ``org.freedesktop.DBus.Properties.GetAll``."""
    msg = new_method_call(service, object_path, PROPERTIES_INTERFACE, 'GetAll', 's', [interface])

    reply = await connection.call(msg, timeout)
    check_method_return(reply, 'a{sv}')

    properties = reply.body[0]
    if type(properties) is not dict:
        raise ProtocolViolationError('GetAll did not return a dictionary')

    return properties
