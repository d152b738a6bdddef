from .constants import WaitStrategy, DEFAULT_POLL_INTERVAL
from .errors import PendingReplyError, ResourceExhaustedError, SendError

from dbus_next import Message, ErrorType

import asyncio
import logging
from typing import Awaitable, Callable, Optional


class PendingReply:
    """A handle on a method call that is waiting for its reply.

    A pending reply completes exactly once, with the reply message, with a
    ``org.freedesktop.DBus.Error.NoReply`` error reply generated when the
    timeout expires, or with the exception that made the send fail. The
    completed reply is taken with :func:`steal_reply()
    <busprobe.PendingReply.steal_reply>`, which can only be done once.

    Pending replies are created by :func:`BusConnection.send_with_reply()
    <busprobe.BusConnection.send_with_reply>`. Use them as a context manager
    so that they are released on every exit path.

    :param request: The method call that was sent.
    :type request: :class:`Message <dbus_next.Message>`
    :param call: The awaitable that resolves to the reply.
    :param timeout: Seconds to wait for the reply before completing with a
        ``NoReply`` error. :class:`None` waits forever.
    :type timeout: float

    :ivar request: The method call that was sent.
    :vartype request: :class:`Message <dbus_next.Message>`
    """
    def __init__(self, request: Message, call: Awaitable, timeout: Optional[float] = None):
        self.request = request
        self._loop = asyncio.get_running_loop()
        self._future = self._loop.create_future()
        self._consumed = False
        self._released = False

        self._call = asyncio.ensure_future(call)
        self._call.add_done_callback(self._on_call_done)

        self._timer = None
        if timeout is not None:
            self._timer = self._loop.call_later(timeout, self._on_timeout, timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

    @property
    def completed(self) -> bool:
        """Whether a reply, timeout or send failure has been recorded."""
        return self._future.done() and not self._future.cancelled()

    @property
    def consumed(self) -> bool:
        return self._consumed

    def add_done_callback(self, callback: Callable[['PendingReply'], None]):
        """Call ``callback(pending)`` once the pending reply completes.

        The callback runs from the event loop whether or not anyone is
        waiting on the pending reply.
        """
        def on_done(future):
            if not future.cancelled():
                callback(self)

        self._future.add_done_callback(on_done)

    async def block(self):
        """Wait until the pending reply completes."""
        self._check_usable()
        await asyncio.wait({self._future})
        self._check_usable()

    async def poll(self, interval: float = DEFAULT_POLL_INTERVAL):
        """Check the completion flag every ``interval`` seconds until the
        pending reply completes.

        Raises :class:`PendingReplyError <busprobe.PendingReplyError>` if the
        pending reply is released while polling.
        """
        while True:
            self._check_usable()
            if self._future.done():
                return
            await asyncio.sleep(interval)

    async def wait(self,
                   strategy: WaitStrategy = WaitStrategy.AWAIT,
                   poll_interval: float = DEFAULT_POLL_INTERVAL):
        if strategy is WaitStrategy.POLL:
            await self.poll(poll_interval)
        else:
            await self.block()

    def steal_reply(self) -> Message:
        """Take the reply out of the completed pending reply.

        :returns: The reply message. This may be an error reply.
        :rtype: :class:`Message <dbus_next.Message>`

        :raises:
            - :class:`PendingReplyError <busprobe.PendingReplyError>` - If the \
              pending reply has not completed, was already stolen or was released.
            - :class:`SendError <busprobe.SendError>` - If sending the request failed.
            - :class:`ResourceExhaustedError <busprobe.ResourceExhaustedError>` \
              - If memory ran out while sending the request.
        """
        self._check_usable()
        if not self.completed:
            raise PendingReplyError(f'reply to {self._describe()} has not arrived yet')

        self._consumed = True
        return self._future.result()

    def release(self):
        """Drop the timeout and the call if they are still outstanding.

        Releasing twice does nothing.
        """
        if self._released:
            return
        self._released = True

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if not self._call.done():
            logging.debug(f'releasing {self._describe()} before its reply arrived')
            self._call.cancel()

        if not self._future.done():
            self._future.cancel()
        elif not self._future.cancelled() and not self._consumed:
            # mark a dropped send failure as retrieved
            self._future.exception()

    def _check_usable(self):
        if self._released:
            raise PendingReplyError(f'pending reply to {self._describe()} was released')
        if self._consumed:
            raise PendingReplyError(f'reply to {self._describe()} was already consumed')

    def _describe(self):
        msg = self.request
        return f'{msg.interface}.{msg.member} (serial {msg.serial})'

    def _on_call_done(self, call):
        if call.cancelled() or self._future.done():
            return

        err = call.exception()
        if err is None:
            logging.debug(f'reply to {self._describe()} arrived')
            self._complete(result=call.result())
        elif isinstance(err, MemoryError):
            self._complete(
                error=ResourceExhaustedError(f'out of memory sending {self._describe()}'),
                cause=err)
        else:
            self._complete(error=SendError(f'sending {self._describe()} failed: {err}'), cause=err)

    def _on_timeout(self, timeout):
        if self._future.done():
            return

        logging.debug(f'no reply to {self._describe()} within {timeout} seconds')
        self._complete(result=Message.new_error(
            self.request, ErrorType.NO_REPLY.value,
            f'Did not receive a reply within {timeout} seconds'))
        self._call.cancel()

    def _complete(self, result=None, error=None, cause=None):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if error is not None:
            error.__cause__ = cause
            self._future.set_exception(error)
        else:
            self._future.set_result(result)
