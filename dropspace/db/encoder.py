import json

from dropspace.stdlib.time import Expiration

MAX_SAFE_INT = 2 ** 63 - 1
MIN_SAFE_INT = -(2 ** 63)

##
# ENCODER CLASS
# Add to this to encode Python types for storage.
# Expirations are stored as tagged dicts so they come back as Expiration objects.
##


class Encoder(json.JSONEncoder):
    def default(self, o, *args):
        if isinstance(o, Expiration):
            return {
                '__expires__': [o.kind, o.value]
            }
        elif isinstance(o, bytes):
            return {
                '__bytes__': o.hex()
            }
        return super().default(o)


def encode_int(value: int):
    if MIN_SAFE_INT < value < MAX_SAFE_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_ints(data):
    if isinstance(data, bool):
        return data
    if isinstance(data, int):
        return encode_int(data)
    if isinstance(data, dict):
        return {k: encode_ints(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [encode_ints(i) for i in data]
    return data


# JSON library from Python 3 doesn't let you instantiate your custom Encoder. You have to pass it as an obj to json
def encode(data):
    """ NOTE:
    Values wider than a signed 64 bit integer are stored as strings so that
    u64 counters and u128 fund amounts survive storage engines with 8 byte ints.
    """
    return json.dumps(encode_ints(data), cls=Encoder, separators=(',', ':'))


def as_object(d):
    if '__expires__' in d:
        kind, value = d['__expires__']
        return Expiration(kind, value)
    elif '__bytes__' in d:
        return bytes.fromhex(d['__bytes__'])
    elif '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None
