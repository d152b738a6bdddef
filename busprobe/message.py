from .errors import InvalidRequestError, ProtocolViolationError, RemoteError

from dbus_next import Message, MessageType, Variant

from typing import Any, List, Optional

_INTEGER_RANGES = {
    'y': (0, 2**8 - 1),
    'n': (-2**15, 2**15 - 1),
    'q': (0, 2**16 - 1),
    'i': (-2**31, 2**31 - 1),
    'u': (0, 2**32 - 1),
    'x': (-2**63, 2**63 - 1),
    't': (0, 2**64 - 1),
}


def new_method_call(destination: str,
                    path: str,
                    interface: str,
                    member: str,
                    signature: str = '',
                    body: Optional[List[Any]] = None) -> Message:
    """Build a method call message.

    :raises:
        - :class:`InvalidRequestError <busprobe.InvalidRequestError>` - If a \
          name, path or signature is not valid.
    """
    try:
        return Message(destination=destination,
                       path=path,
                       interface=interface,
                       member=member,
                       signature=signature,
                       body=body if body is not None else [])
    except (ValueError, TypeError) as e:
        raise InvalidRequestError(f'could not build {interface}.{member} call: {e}') from e


def check_method_return(reply: Optional[Message], signature: Optional[str]):
    """Raise if the reply is not a method return with the given signature.

    An error reply raises :class:`RemoteError <busprobe.RemoteError>`. Its
    body is only used for the error text.
    """
    if reply is None:
        raise ProtocolViolationError('no reply was received')
    elif reply.message_type == MessageType.ERROR:
        raise RemoteError._from_message(reply)
    elif reply.message_type != MessageType.METHOD_RETURN:
        raise ProtocolViolationError(f'unexpected reply type: {reply.message_type.name}')

    if signature is None or reply.signature == signature:
        return

    if not reply.signature:
        raise ProtocolViolationError('reply has no arguments')

    raise ProtocolViolationError(
        f'reply has signature "{reply.signature}", expected "{signature}"')


def unwrap_variant(variant: Variant, signature: Optional[str] = None) -> Any:
    """Return the value boxed in the variant.

    If a signature is given, the variant must hold that type. Integer values
    of another integer type are accepted when they fit in the requested one.
    """
    if type(variant) is not Variant:
        raise ProtocolViolationError(f'expected a variant, got {type(variant).__name__}')

    if signature is None or variant.signature == signature:
        return variant.value

    if signature in _INTEGER_RANGES and variant.signature in _INTEGER_RANGES:
        low, high = _INTEGER_RANGES[signature]
        if low <= variant.value <= high:
            return variant.value
        raise ProtocolViolationError(
            f'value {variant.value} of type "{variant.signature}" does not fit in "{signature}"')

    raise ProtocolViolationError(
        f'variant holds type "{variant.signature}", expected "{signature}"')
