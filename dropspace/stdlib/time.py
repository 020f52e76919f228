from datetime import datetime, timezone

import iso8601

from dropspace import config
from dropspace.exceptions import InvalidTime, InvalidExpiration

NEVER = 'never'
AT_HEIGHT = 'at_height'
AT_TIME = 'at_time'

KINDS = (NEVER, AT_HEIGHT, AT_TIME)


def to_seconds(value):
    """Accepts seconds since the epoch, a datetime or an ISO-8601 string."""
    if isinstance(value, bool):
        raise InvalidTime(value=value, reason='not a time')

    if isinstance(value, int):
        if value < 0:
            raise InvalidTime(value=value, reason='negative')
        return value

    if isinstance(value, str):
        try:
            value = iso8601.parse_date(value)
        except iso8601.ParseError as e:
            raise InvalidTime(value=value, reason=str(e)) from e

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())

    raise InvalidTime(value=value, reason='unsupported type {}'.format(type(value).__name__))


class BlockInfo:
    def __init__(self, height=config.DEFAULT_BLOCK_HEIGHT, time=config.DEFAULT_BLOCK_TIME,
                 chain_id=config.DEFAULT_CHAIN_ID):
        self.height = int(height)
        self.time = to_seconds(time)
        self.chain_id = chain_id

    @classmethod
    def from_dict(cls, d):
        if isinstance(d, BlockInfo):
            return d
        return cls(**d)

    def to_dict(self):
        return {'height': self.height, 'time': self.time, 'chain_id': self.chain_id}

    def __eq__(self, other):
        return isinstance(other, BlockInfo) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'BlockInfo(height={}, time={})'.format(self.height, self.time)


class Expiration:
    """
    When an approval stops being valid: never, once the chain reaches a
    block height, or once block time reaches a timestamp (seconds).
    """

    def __init__(self, kind=NEVER, value=None):
        if kind not in KINDS:
            raise InvalidExpiration(expires={kind: value}, reason='unknown kind')

        if kind == NEVER:
            value = None
        elif kind == AT_HEIGHT:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidExpiration(expires={kind: value}, reason='height must be an unsigned integer')
        else:
            try:
                value = to_seconds(value)
            except InvalidTime as e:
                raise InvalidExpiration(expires={kind: value}, reason=str(e)) from e

        self.kind = kind
        self.value = value

    @classmethod
    def never(cls):
        return cls(NEVER)

    @classmethod
    def at_height(cls, height):
        return cls(AT_HEIGHT, height)

    @classmethod
    def at_time(cls, time):
        return cls(AT_TIME, time)

    @classmethod
    def parse(cls, expires):
        # Messages carry {'at_height': 10}, {'at_time': '2030-01-01T00:00:00Z'} or {'never': {}}
        if expires is None:
            return cls.never()

        if isinstance(expires, Expiration):
            return expires

        if not isinstance(expires, dict) or len(expires) != 1:
            raise InvalidExpiration(expires=expires, reason='expected exactly one of never, at_height, at_time')

        kind, value = next(iter(expires.items()))
        return cls(kind, value)

    def is_expired(self, block: BlockInfo):
        if self.kind == AT_HEIGHT:
            return block.height >= self.value
        if self.kind == AT_TIME:
            return block.time >= self.value
        return False

    def to_dict(self):
        if self.kind == NEVER:
            return {NEVER: {}}
        return {self.kind: self.value}

    def __eq__(self, other):
        if not isinstance(other, Expiration):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __str__(self):
        if self.kind == NEVER:
            return 'expiration: never'
        if self.kind == AT_HEIGHT:
            return 'expiration height: {}'.format(self.value)
        return 'expiration time: {}'.format(self.value)

    def __repr__(self):
        return 'Expiration({!r}, {!r})'.format(self.kind, self.value)
