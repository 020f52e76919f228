from itertools import islice

from dropspace.exceptions import NotFound
from dropspace.stdlib.time import Expiration
from dropspace.contract.registry import clamp_limit
from dropspace.stdlib.math import checked_add


def humanize_approvals(token, block, include_expired):
    return [a.humanize() for a in token.approvals if include_expired or not a.is_expired(block)]


class Queries:
    """Read-only projections over registry, authorization and economics state."""
    def __init__(self, state, registry, ownership, api):
        self.state = state
        self.registry = registry
        self.ownership = ownership
        self.api = api

    def minter(self):
        return {'minter': self.ownership.current_owner()}

    def contract_info(self):
        return {'name': self.state.name.get(), 'symbol': self.state.symbol.get()}

    def nft_info(self, token_id):
        token = self.registry.load(token_id)
        return {'token_uri': token.token_uri, 'extension': token.extension}

    def owner_of(self, token_id, block, include_expired=False):
        token = self.registry.load(token_id)
        return {'owner': token.owner, 'approvals': humanize_approvals(token, block, include_expired)}

    def all_nft_info(self, token_id, block, include_expired=False):
        token = self.registry.load(token_id)
        return {
            'access': {'owner': token.owner, 'approvals': humanize_approvals(token, block, include_expired)},
            'info': {'token_uri': token.token_uri, 'extension': token.extension},
        }

    def operator(self, owner, operator, block, include_expired=False):
        owner = self.api.validate(owner)
        operator = self.api.validate(operator)

        expires = self.state.operators[owner, operator]
        if expires is None or (not include_expired and expires.is_expired(block)):
            raise NotFound(kind='approval', key=operator)

        return {'approval': {'spender': operator, 'expires': expires.to_dict()}}

    def all_operators(self, owner, block, include_expired=False, start_after=None, limit=None):
        owner = self.api.validate(owner)
        start_after = self.api.maybe_validate(start_after)

        def live():
            for operator in self.state.operators.scan(owner, start_after=start_after):
                expires = self.state.operators[owner, operator]
                if include_expired or not expires.is_expired(block):
                    yield {'spender': operator, 'expires': expires.to_dict()}

        return {'operators': list(islice(live(), clamp_limit(limit)))}

    def num_tokens(self):
        return {'count': self.registry.num_tokens()}

    def tokens(self, owner, start_after=None, limit=None):
        owner = self.api.validate(owner)
        return {'tokens': list(self.registry.tokens_by_owner(owner, start_after=start_after, limit=limit))}

    def all_tokens(self, start_after=None, limit=None):
        return {'tokens': list(self.registry.all_tokens(start_after=start_after, limit=limit))}

    def approval(self, token_id, spender, block, include_expired=False):
        token = self.registry.load(token_id)

        # token owner has absolute approval
        if token.owner == spender:
            return {'approval': {'spender': token.owner, 'expires': Expiration.never().to_dict()}}

        for a in token.approvals:
            if a.spender == spender and (include_expired or not a.is_expired(block)):
                return {'approval': a.humanize()}

        raise NotFound(kind='approval', key=spender)

    def approvals(self, token_id, block, include_expired=False):
        token = self.registry.load(token_id)
        return {'approvals': humanize_approvals(token, block, include_expired)}

    def ownership_info(self):
        return self.ownership.info()

    def mint_price(self):
        return checked_add(self.state.mint_fee.get(), self.state.dev_fee.get())

    def states(self):
        return {
            'name': self.state.name.get(),
            'symbol': self.state.symbol.get(),
            'base_uri': self.state.base_uri.get(),
            'token_id_base': self.state.token_id_base.get(),
            'mint_price': self.mint_price(),
            'mint_per_tx': self.state.mint_per_tx.get(),
            'mint_fee': self.state.mint_fee.get(),
            'dev_fee': self.state.dev_fee.get(),
            'supply_limit': self.state.supply_limit.get(),
            'total_supply': self.state.total_supply.get(),
            'reserved_amount': self.state.reserved_amount.get(),
            'withdraw_address': self.state.withdraw_address.get(),
            'dev_wallet': self.state.dev_wallet.get(),
            'sale_time': self.state.sale_time.get(),
            'sale_active': self.state.sale_active.get(),
        }
