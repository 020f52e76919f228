from bisect import bisect_left, bisect_right
from heapq import merge

from dropspace.db.encoder import encode, decode
from dropspace import config
import logging

logger = logging.getLogger('Driver')

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    """
    Ordered byte key-value store. Stands in for the host's storage engine:
    point get/set/delete plus ascending range scans over a key prefix.
    """
    def __init__(self):
        self.db = {}
        self._sorted = []

    def get(self, item: str):
        res = self.db.get(item.encode())
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
            return

        k = key.encode()
        if k not in self.db:
            self._sorted.insert(bisect_left(self._sorted, k), k)

        self.db[k] = encode(value).encode()

    def delete(self, key: str):
        k = key.encode()
        if self.db.pop(k, None) is not None:
            del self._sorted[bisect_left(self._sorted, k)]

    def scan(self, prefix: str, start_after: str = None):
        p = prefix.encode()

        if start_after is None:
            i = bisect_left(self._sorted, p)
        else:
            i = bisect_right(self._sorted, start_after.encode())
            i = max(i, bisect_left(self._sorted, p))

        while i < len(self._sorted):
            k = self._sorted[i]
            if not k.startswith(p):
                break
            yield k.decode()
            i += 1

    def keys(self):
        return [k.decode() for k in self._sorted]

    def flush(self):
        self.db.clear()
        self._sorted.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L2 cache, writes of the message being executed
        self.cache = {}  # L1 cache, applied messages not yet committed
        self.driver = driver if driver is not None else InMemDriver()  # L0

        self.pending_reads = {}

    def _overlay(self, key):
        # Returns (found, value); a None value found in a cache tier is a delete
        if key in self.pending_writes:
            return True, self.pending_writes[key]

        if key in self.cache:
            return True, self.cache[key]

        return False, None

    def find(self, key: str):
        found, value = self._overlay(key)
        if found:
            return value

        return self.driver.get(key)

    def get(self, key: str, save: bool = True):
        value = self.find(key)

        if save and key not in self.pending_reads:
            self.pending_reads[key] = value

        return value

    def set(self, key, value):
        if key not in self.pending_reads:
            self.get(key)

        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def soft_apply(self):
        self.cache.update(self.pending_writes)

        # Clear the top cache
        self.pending_reads = {}
        self.pending_writes = {}

    def commit(self):
        self.cache.update(self.pending_writes)

        for k, v in self.cache.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.cache = {}
        self.pending_writes = {}
        self.pending_reads = {}

    def clear_pending_state(self):
        # Discards only the writes of the message currently executing
        self.pending_reads = {}
        self.pending_writes = {}

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.cache = {}
        self.clear_pending_state()


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR
        self.log = logging.getLogger('Driver')

    def _overlay_keys(self, prefix, start_after=None):
        keys = set(k for k in self.cache if k.startswith(prefix))
        keys.update(k for k in self.pending_writes if k.startswith(prefix))

        if start_after is not None:
            keys = set(k for k in keys if k > start_after)

        return sorted(keys)

    def scan(self, prefix='', start_after=None):
        """
        Lazily yields live keys under prefix in ascending order, strictly after
        start_after, merging uncommitted writes over the underlying store.
        """
        last = None
        for k in merge(self.driver.scan(prefix, start_after), self._overlay_keys(prefix, start_after)):
            if k == last:
                continue
            last = k

            found, value = self._overlay(k)
            if found and value is None:
                continue

            yield k

    def keys(self, prefix=''):
        return list(self.scan(prefix))

    def make_key(self, contract, variable, args=[]):
        contract_variable = self.delimiter.join((contract, variable))
        if args:
            return config.DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
        return contract_variable

    def get_var(self, contract, variable, arguments=[]):
        key = self.make_key(contract, variable, arguments)
        return self.get(key)

    def get_contract_keys(self, name):
        return self.keys(name + self.delimiter)

    def flush(self):
        self.driver.flush()
        self.rollback()
