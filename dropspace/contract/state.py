from dropspace.db.orm import Variable, Hash
from dropspace.stdlib.time import Expiration
from dropspace import config


class Approval:
    def __init__(self, spender, expires=None):
        self.spender = spender
        self.expires = Expiration.parse(expires)

    def is_expired(self, block):
        return self.expires.is_expired(block)

    def to_dict(self):
        return {'spender': self.spender, 'expires': self.expires}

    @classmethod
    def from_dict(cls, d):
        return cls(spender=d['spender'], expires=d['expires'])

    def humanize(self):
        return {'spender': self.spender, 'expires': self.expires.to_dict()}

    def __eq__(self, other):
        return isinstance(other, Approval) and (self.spender, self.expires) == (other.spender, other.expires)

    def __repr__(self):
        return 'Approval({}, {})'.format(self.spender, self.expires)


class TokenRecord:
    def __init__(self, owner, approvals=None, token_uri=None, extension=None):
        self.owner = owner
        self.approvals = list(approvals or [])
        self.token_uri = token_uri
        self.extension = extension

    def to_dict(self):
        return {
            'owner': self.owner,
            'approvals': [a.to_dict() for a in self.approvals],
            'token_uri': self.token_uri,
            'extension': self.extension,
        }

    @classmethod
    def from_dict(cls, d):
        return cls(
            owner=d['owner'],
            approvals=[Approval.from_dict(a) for a in d.get('approvals', [])],
            token_uri=d.get('token_uri'),
            extension=d.get('extension'),
        )

    def __eq__(self, other):
        return isinstance(other, TokenRecord) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'TokenRecord(owner={}, approvals={})'.format(self.owner, self.approvals)


class NftState:
    """
    Persisted layout. One slot per economics field, tokens keyed by id, a
    derived (owner, token_id) index, and operator grants keyed by
    (owner, operator).
    """
    def __init__(self, driver, contract=config.CONTRACT_NAME):
        self.driver = driver
        self.contract = contract

        # Contract info
        self.name = Variable(contract, 'name', driver=driver)
        self.symbol = Variable(contract, 'symbol', driver=driver)
        self.base_uri = Variable(contract, 'base_uri', driver=driver, default_value=config.DEFAULT_BASE_URI)
        self.token_id_base = Variable(contract, 'token_id_base', driver=driver,
                                      default_value=config.DEFAULT_TOKEN_ID_BASE)

        # Economics
        self.mint_per_tx = Variable(contract, 'mint_per_tx', driver=driver, default_value=config.DEFAULT_MINT_PER_TX)
        self.mint_fee = Variable(contract, 'mint_fee', driver=driver, default_value=config.DEFAULT_MINT_FEE)
        self.dev_fee = Variable(contract, 'dev_fee', driver=driver, default_value=config.DEFAULT_DEV_FEE)
        self.supply_limit = Variable(contract, 'supply_limit', driver=driver,
                                     default_value=config.DEFAULT_SUPPLY_LIMIT)
        self.total_supply = Variable(contract, 'total_supply', driver=driver, default_value=0)
        self.reserved_amount = Variable(contract, 'reserved_amount', driver=driver,
                                        default_value=config.DEFAULT_RESERVED_AMOUNT)
        self.withdraw_address = Variable(contract, 'withdraw_address', driver=driver)
        self.dev_wallet = Variable(contract, 'dev_wallet', driver=driver)
        self.sale_time = Variable(contract, 'sale_time', driver=driver, default_value=config.DEFAULT_SALE_TIME)
        self.sale_active = Variable(contract, 'sale_active', driver=driver, default_value=False)

        # Live token count, decremented on burn
        self.token_count = Variable(contract, 'num_tokens', driver=driver, default_value=0)

        # Tokens
        self.tokens = Hash(contract, 'tokens', driver=driver)
        self.owner_index = Hash(contract, 'owner_index', driver=driver)
        self.operators = Hash(contract, 'operators', driver=driver)

        # Admin ownership
        self.owner = Variable(contract, 'owner', driver=driver)
        self.pending_owner = Variable(contract, 'pending_owner', driver=driver)
        self.pending_expiry = Variable(contract, 'pending_expiry', driver=driver)

    def load_token(self, token_id):
        raw = self.tokens[token_id]
        if raw is None:
            return None
        return TokenRecord.from_dict(raw)

    def save_token(self, token_id, token: TokenRecord):
        self.tokens[token_id] = token.to_dict()
