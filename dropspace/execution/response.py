from dropspace.stdlib.math import as_uint
from dropspace import config


class Coin:
    def __init__(self, amount, denom=config.DENOM):
        self.amount = as_uint(amount, limit=config.U128_MAX)
        self.denom = denom

    @classmethod
    def parse(cls, c):
        if isinstance(c, Coin):
            return c
        return cls(amount=int(c['amount']), denom=c['denom'])

    def to_dict(self):
        return {'denom': self.denom, 'amount': str(self.amount)}

    def __eq__(self, other):
        return isinstance(other, Coin) and (self.amount, self.denom) == (other.amount, other.denom)

    def __repr__(self):
        return '{}{}'.format(self.amount, self.denom)


class BankMsg:
    """Instructs the host to move funds held by the contract."""
    def __init__(self, to_address, amount):
        self.to_address = to_address
        self.amount = list(amount)

    def to_dict(self):
        return {'bank': {'send': {'to_address': self.to_address, 'amount': [c.to_dict() for c in self.amount]}}}

    def __eq__(self, other):
        return isinstance(other, BankMsg) and (self.to_address, self.amount) == (other.to_address, other.amount)

    def __repr__(self):
        return 'BankMsg(to={}, amount={})'.format(self.to_address, self.amount)


class ReceiveNftMsg:
    """Notifies a receiving contract that a token was sent to it."""
    def __init__(self, contract, sender, token_id, msg):
        self.contract = contract
        self.sender = sender
        self.token_id = token_id
        self.msg = msg

    def to_dict(self):
        return {'wasm': {'execute': {
            'contract_addr': self.contract,
            'msg': {'receive_nft': {'sender': self.sender, 'token_id': self.token_id, 'msg': self.msg}},
            'funds': [],
        }}}

    def __eq__(self, other):
        return isinstance(other, ReceiveNftMsg) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'ReceiveNftMsg(contract={}, token_id={})'.format(self.contract, self.token_id)


class Response:
    """
    Effects of one successful message: attributes for the event log,
    messages the host must dispatch, and optional structured data.
    """
    def __init__(self):
        self.attributes = []
        self.messages = []
        self.data = None

    def add_attribute(self, key, value):
        self.attributes.append((key, str(value)))
        return self

    def add_attributes(self, pairs):
        for k, v in pairs:
            self.add_attribute(k, v)
        return self

    def add_message(self, msg):
        self.messages.append(msg)
        return self

    def set_data(self, data):
        self.data = data
        return self

    def attribute(self, key):
        for k, v in self.attributes:
            if k == key:
                return v
        return None

    def to_dict(self):
        return {
            'attributes': [{'key': k, 'value': v} for k, v in self.attributes],
            'messages': [m.to_dict() for m in self.messages],
            'data': self.data,
        }

    def __repr__(self):
        return 'Response(attributes={}, messages={})'.format(self.attributes, self.messages)
