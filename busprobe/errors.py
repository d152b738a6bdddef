class BusProbeError(Exception):
    pass


class BusConnectionError(BusProbeError):
    pass


class NameRequestError(BusConnectionError):
    def __init__(self, name, reason):
        super().__init__(f'could not become primary owner of {name}: {reason}')
        self.name = name
        self.reason = reason


class InvalidRequestError(BusProbeError, ValueError):
    pass


class ResourceExhaustedError(BusProbeError):
    pass


class SendError(BusProbeError):
    pass


class PendingReplyError(BusProbeError):
    pass


class ProtocolViolationError(BusProbeError, ValueError):
    pass


from dbus_next import Message, MessageType


class RemoteError(BusProbeError):
    """An error reply sent by the bus daemon or the called service.

    :ivar type: The error name of the reply.
    :vartype type: str
    :ivar text: The error text, if the reply carried one.
    :vartype text: str
    :ivar reply: The error reply.
    :vartype reply: :class:`Message <dbus_next.Message>`
    """
    def __init__(self, type_, text='', reply=None):
        super().__init__(f'{type_}: {text}' if text else type_)

        if reply is not None and type(reply) is not Message:
            raise TypeError('reply must be of type Message')

        self.type = type_
        self.text = text
        self.reply = reply

    @staticmethod
    def _from_message(msg):
        """The body is only read for the display text, and only when it is a
        single string. Anything else leaves ``text`` empty."""
        assert msg.message_type == MessageType.ERROR
        text = msg.body[0] if msg.signature == 's' and msg.body else ''
        return RemoteError(msg.error_name, text, reply=msg)
