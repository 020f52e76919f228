from dropspace import config
from dropspace.exceptions import InvalidAddress


class AddressValidator:
    """
    Stand-in for the host's address API. Principals are opaque strings but
    must be storable as a map key component.
    """
    def __init__(self, min_length=config.MIN_ADDRESS_LENGTH, max_length=config.MAX_ADDRESS_LENGTH):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, address):
        if not isinstance(address, str):
            raise InvalidAddress(address=address, reason='not a string')

        if len(address) < self.min_length:
            raise InvalidAddress(address=address, reason='too short')

        if len(address) > self.max_length:
            raise InvalidAddress(address=address, reason='too long')

        if address != address.strip() or any(c.isspace() for c in address):
            raise InvalidAddress(address=address, reason='contains whitespace')

        if config.DELIMITER in address:
            raise InvalidAddress(address=address, reason='contains a reserved character')

        return address

    def maybe_validate(self, address):
        if address is None:
            return None
        return self.validate(address)
