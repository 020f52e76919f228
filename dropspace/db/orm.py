from dropspace.db.driver import ContractDriver
from dropspace.exceptions import InvalidKey
from dropspace import config


class Datum:
    def __init__(self, contract, name, driver: ContractDriver):
        self._driver = driver
        self._key = self._driver.make_key(contract, name)


class Variable(Datum):
    def __init__(self, contract, name, driver: ContractDriver, t=None, default_value=None):
        self._type = None
        self._default_value = default_value

        if isinstance(t, type):
            self._type = t

        super().__init__(contract, name, driver=driver)

    def set(self, value):
        if self._type is not None and value is not None:
            assert isinstance(value, self._type), 'Wrong type passed to variable! Expected {}, got {}.'.format(
                self._type,
                type(value)
            )

        self._driver.set(self._key, value)

    def get(self):
        value = self._driver.get(self._key)
        if value is None:
            return self._default_value
        return value

    def remove(self):
        self._driver.delete(self._key)


class Hash(Datum):
    def __init__(self, contract, name, driver: ContractDriver, default_value=None):
        super().__init__(contract, name, driver=driver)
        self._delimiter = config.DELIMITER
        self._default_value = default_value

    def _set(self, key, value):
        self._driver.set('{}{}{}'.format(self._key, self._delimiter, key), value)

    def _get(self, item):
        value = self._driver.get('{}{}{}'.format(self._key, self._delimiter, item))

        # Add Python defaultdict behavior for easier smart contracting
        if value is None:
            value = self._default_value

        return value

    def _validate_part(self, k, leading=True):
        if isinstance(k, slice):
            raise InvalidKey(key=k, reason='slices prohibited in hashes')

        k = str(k)

        # Only leading components are followed by a delimiter. The last one may hold anything.
        if leading and config.DELIMITER in k:
            raise InvalidKey(key=k, reason='illegal delimiter')

        return k

    def _validate_key(self, key, open_ended=True):
        parts = key if isinstance(key, tuple) else (key,)

        if len(parts) > config.MAX_HASH_DIMENSIONS:
            raise InvalidKey(key=key, reason='too many dimensions ({}), max is {}'.format(
                len(parts), config.MAX_HASH_DIMENSIONS))

        last = len(parts) - 1
        key = self._delimiter.join(
            self._validate_part(k, leading=not open_ended or i < last) for i, k in enumerate(parts)
        )

        if len(key) > config.MAX_KEY_SIZE:
            raise InvalidKey(key=key, reason='too long ({}), max is {}'.format(len(key), config.MAX_KEY_SIZE))

        return key

    def _prefix_for_args(self, args):
        multi = self._validate_key(args, open_ended=False)
        prefix = '{}{}'.format(self._key, self._delimiter)
        if multi != '':
            prefix += '{}{}'.format(multi, self._delimiter)

        return prefix

    def scan(self, *args, start_after=None):
        """
        Lazily yields the remaining key components under the given leading
        components, in ascending order, strictly after start_after.
        """
        prefix = self._prefix_for_args(args)

        start = None
        if start_after is not None:
            start = prefix + self._validate_key(start_after)

        for k in self._driver.scan(prefix=prefix, start_after=start):
            yield k[len(prefix):]

    def __setitem__(self, key, value):
        # handle multiple hashes differently
        key = self._validate_key(key)
        self._set(key, value)

    def __getitem__(self, key):
        key = self._validate_key(key)
        return self._get(key)

    def __delitem__(self, key):
        key = self._validate_key(key)
        self._set(key, None)

    def __contains__(self, key):
        key = self._validate_key(key)
        return self._driver.get('{}{}{}'.format(self._key, self._delimiter, key)) is not None
