from .constants import DEFAULT_REPLY_TIMEOUT
from .errors import BusConnectionError, NameRequestError, ResourceExhaustedError, SendError
from .pending import PendingReply

from dbus_next import BusType, Message, NameFlag, RequestNameReply, DBusError
from dbus_next.aio import MessageBus
from dbus_next.errors import AuthError, InvalidAddressError

import logging
from typing import Callable, Optional


class BusConnection:
    """A connection to a DBus message bus for one request/reply flow.

    The connection wraps a :class:`dbus_next.aio.MessageBus` and hands out a
    :class:`PendingReply <busprobe.PendingReply>` for every method call it
    sends. Use it as an async context manager to make sure it is
    disconnected on every exit path::

        async with BusConnection() as connection:
            reply = await connection.call(msg)

    :param bus_address: A specific bus address to connect to. Should not be
        used under normal circumstances.
    :type bus_address: str
    :param bus_type: The type of bus to connect to.
    :type bus_type: :class:`BusType <dbus_next.BusType>`
    :param reply_timeout: Seconds to wait for a reply when a call does not
        give its own timeout.
    :type reply_timeout: float
    :param bus: An unconnected message bus to use instead of creating one.
    """
    def __init__(self,
                 bus_address: Optional[str] = None,
                 bus_type: BusType = BusType.SESSION,
                 reply_timeout: float = DEFAULT_REPLY_TIMEOUT,
                 bus=None):
        self.reply_timeout = reply_timeout
        self._bus_address = bus_address
        self._bus_type = bus_type
        self._bus = bus
        self._connected = False

    async def __aenter__(self):
        return await self.connect()

    async def __aexit__(self, exc_type, exc_value, traceback):
        self.disconnect()

    @property
    def unique_name(self) -> Optional[str]:
        return self._bus.unique_name if self._connected else None

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> 'BusConnection':
        """Connect to the message bus.

        :returns: This connection for convenience.

        :raises:
            - :class:`BusConnectionError <busprobe.BusConnectionError>` - If \
              the bus could not be reached or authentication failed.
        """
        if self._connected:
            return self

        try:
            if self._bus is None:
                self._bus = MessageBus(bus_address=self._bus_address, bus_type=self._bus_type)
            await self._bus.connect()
        except (InvalidAddressError, AuthError, DBusError, OSError) as e:
            raise BusConnectionError(f'could not connect to the {self._bus_type.name.lower()} '
                                     f'bus: {e}') from e

        self._connected = True
        logging.debug(f'connected to the bus as {self._bus.unique_name}')
        return self

    async def request_name(self, name: str, flags: NameFlag = NameFlag.REPLACE_EXISTING):
        """Claim a well-known name on the bus.

        Only becoming the primary owner of the name counts as success.

        :raises:
            - :class:`NameRequestError <busprobe.NameRequestError>` - If the \
              bus refused the request or queued it.
        """
        self._check_connected()

        try:
            reply = await self._bus.request_name(name, flags)
        except DBusError as e:
            raise NameRequestError(name, e.type) from e

        if reply != RequestNameReply.PRIMARY_OWNER:
            raise NameRequestError(name, reply.name)

        logging.debug(f'became primary owner of {name}')

    def send_with_reply(self,
                        msg: Message,
                        timeout: Optional[float] = None,
                        callback: Optional[Callable[[PendingReply], None]] = None) -> PendingReply:
        """Send a method call and return a handle on its reply.

        :param msg: The method call to send.
        :type msg: :class:`Message <dbus_next.Message>`
        :param timeout: Seconds to wait for the reply. Defaults to the
            connection's ``reply_timeout``.
        :type timeout: float
        :param callback: Called with the pending reply once it completes.

        :returns: The pending reply.
        :rtype: :class:`PendingReply <busprobe.PendingReply>`

        :raises:
            - :class:`ResourceExhaustedError <busprobe.ResourceExhaustedError>` \
              - If memory ran out while queueing the call.
            - :class:`SendError <busprobe.SendError>` - If the call could not \
              be queued.
        """
        self._check_connected()

        try:
            if not msg.serial:
                msg.serial = self._bus.next_serial()
            pending = PendingReply(msg,
                                   self._bus.call(msg),
                                   timeout if timeout is not None else self.reply_timeout)
        except MemoryError as e:
            raise ResourceExhaustedError(f'out of memory queueing {msg.member}') from e

        if callback is not None:
            pending.add_done_callback(callback)

        logging.debug(f'sent {msg.interface}.{msg.member} to {msg.destination} '
                      f'(serial {msg.serial})')
        return pending

    async def call(self, msg: Message, timeout: Optional[float] = None) -> Message:
        """Send a method call and wait for its reply.

        :returns: The reply. This may be an error reply.
        :rtype: :class:`Message <dbus_next.Message>`
        """
        with self.send_with_reply(msg, timeout) as pending:
            await pending.block()
            return pending.steal_reply()

    def disconnect(self):
        if not self._connected:
            return

        self._connected = False
        self._bus.disconnect()
        logging.debug('disconnected from the bus')

    def _check_connected(self):
        if not self._connected:
            raise SendError('the connection is not connected')
