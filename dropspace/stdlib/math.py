from dropspace import config
from dropspace.exceptions import Overflow, InvalidInteger


def _check(result, operation, a, b, limit):
    if result < 0 or result > limit:
        raise Overflow(operation=operation, a=a, b=b)
    return result


def checked_add(a, b, limit=config.U64_MAX):
    return _check(a + b, 'add', a, b, limit)


def checked_sub(a, b, limit=config.U64_MAX):
    return _check(a - b, 'sub', a, b, limit)


def checked_mul(a, b, limit=config.U64_MAX):
    return _check(a * b, 'mul', a, b, limit)


def saturating_sub(a, b):
    return max(a - b, 0)


def as_uint(value, limit=config.U64_MAX):
    # Integers coming from messages must fit the declared width
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInteger(value=value)

    if value < 0 or value > limit:
        raise Overflow(operation='cast', a=value, b=limit)

    return value
