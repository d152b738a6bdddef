from busprobe import BusConnection

from dbus_next import Message, ErrorType, NameFlag, RequestNameReply

import asyncio
import pytest


class FakeMessageBus:
    """Stands in for :class:`dbus_next.aio.MessageBus`.

    Method calls are answered by responders registered per member name.
    Members without a responder get an ``UnknownMethod`` error, like a real
    service would send.
    """
    def __init__(self):
        self.unique_name = None
        self.sent = []
        self.requested_names = []
        self.request_name_reply = RequestNameReply.PRIMARY_OWNER
        self.connect_error = None
        self.disconnected = False
        self._serial = 0
        self._responders = {}

    def respond(self, member, responder):
        self._responders[member] = responder

    def reply_with(self, member, signature='', body=None, delay=0):
        async def responder(msg):
            if delay:
                await asyncio.sleep(delay)
            return Message.new_method_return(msg, signature, body if body is not None else [])

        self.respond(member, responder)

    def error_with(self, member, error_name, text='an error'):
        async def responder(msg):
            return Message.new_error(msg, error_name, text)

        self.respond(member, responder)

    def never_reply(self, member):
        async def responder(msg):
            await asyncio.get_running_loop().create_future()

        self.respond(member, responder)

    def fail_with(self, member, err):
        async def responder(msg):
            raise err

        self.respond(member, responder)

    async def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.unique_name = ':1.42'
        return self

    def next_serial(self):
        self._serial += 1
        return self._serial

    async def request_name(self, name, flags=NameFlag.NONE):
        self.requested_names.append((name, flags))
        if isinstance(self.request_name_reply, Exception):
            raise self.request_name_reply
        return self.request_name_reply

    async def call(self, msg):
        if not msg.serial:
            msg.serial = self.next_serial()
        self.sent.append(msg)

        responder = self._responders.get(msg.member)
        if responder is None:
            return Message.new_error(msg, ErrorType.UNKNOWN_METHOD.value,
                                     f'no such method "{msg.member}"')

        return await responder(msg)

    def disconnect(self):
        self.disconnected = True


@pytest.fixture
def bus():
    return FakeMessageBus()


@pytest.fixture
def connection(bus):
    return BusConnection(bus=bus, reply_timeout=1.0)
