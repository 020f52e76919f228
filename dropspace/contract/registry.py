from itertools import islice

from dropspace import config
from dropspace.exceptions import AlreadyExists, NotFound, SupplyLimitReached
from dropspace.contract.state import TokenRecord
from dropspace.contract.auth import set_approval, revoke_approval
from dropspace.stdlib.math import checked_add, checked_sub
from dropspace.logger import get_logger

log = get_logger('Registry')


def clamp_limit(limit):
    if limit is None:
        return config.DEFAULT_LIMIT
    return max(0, min(int(limit), config.MAX_LIMIT))


class Registry:
    """
    Owns token records and the (owner, token_id) index derived from them.
    A token id is in the primary map iff it is in the index under its owner.
    """
    def __init__(self, state, auth):
        self.state = state
        self.auth = auth

    def load(self, token_id) -> TokenRecord:
        token = self.state.load_token(token_id)
        if token is None:
            raise NotFound(kind='token', key=token_id)
        return token

    def exists(self, token_id):
        return token_id in self.state.tokens

    def mint(self, token_id, owner, token_uri=None, extension=None) -> TokenRecord:
        if self.exists(token_id):
            raise AlreadyExists(token_id=token_id)

        supply_limit = self.state.supply_limit.get()
        total_supply = checked_add(self.state.total_supply.get(), 1)
        if total_supply > supply_limit:
            raise SupplyLimitReached(supply_limit=supply_limit)

        token_count = checked_add(self.state.token_count.get(), 1)

        token = TokenRecord(owner=owner, approvals=[], token_uri=token_uri, extension=extension)
        self.state.save_token(token_id, token)
        self.state.owner_index[owner, token_id] = True

        self.state.total_supply.set(total_supply)
        self.state.token_count.set(token_count)

        log.debug('Minted {} to {}'.format(token_id, owner))
        return token

    def mint_serial(self, owner, qty, extension=None):
        """
        Mints qty tokens numbered from one read of total_supply. Serials whose
        id is already taken, for instance by an admin mint, are skipped.
        """
        serial = self.state.total_supply.get()
        token_id_base = self.state.token_id_base.get()
        base_uri = self.state.base_uri.get()

        minted = []
        for _ in range(qty):
            serial = checked_add(serial, 1)
            while self.exists('{}{}'.format(token_id_base, serial)):
                serial = checked_add(serial, 1)

            token_id = '{}{}'.format(token_id_base, serial)
            self.mint(token_id, owner, token_uri='{}{}'.format(base_uri, serial), extension=extension)
            minted.append(token_id)

        return minted

    def transfer(self, token_id, new_owner, caller, block) -> TokenRecord:
        token = self.load(token_id)
        self.auth.check_can_send(caller, token, block)

        old_owner = token.owner

        # Approvals never survive a change of owner
        token.owner = new_owner
        token.approvals = []
        self.state.save_token(token_id, token)

        del self.state.owner_index[old_owner, token_id]
        self.state.owner_index[new_owner, token_id] = True

        log.debug('Transferred {} from {} to {}'.format(token_id, old_owner, new_owner))
        return token

    def update_approvals(self, token_id, caller, block, spender, add, expires=None) -> TokenRecord:
        token = self.load(token_id)
        self.auth.check_can_approve(caller, token, block)

        if add:
            set_approval(token, spender, expires, block)
        else:
            revoke_approval(token, spender)

        self.state.save_token(token_id, token)
        return token

    def burn(self, token_id, caller, block):
        token = self.load(token_id)
        self.auth.check_can_send(caller, token, block)

        token_count = checked_sub(self.state.token_count.get(), 1)

        del self.state.tokens[token_id]
        del self.state.owner_index[token.owner, token_id]
        self.state.token_count.set(token_count)

        log.debug('Burned {} owned by {}'.format(token_id, token.owner))
        return token

    def num_tokens(self):
        return self.state.token_count.get()

    def tokens_by_owner(self, owner, start_after=None, limit=None):
        return islice(self.state.owner_index.scan(owner, start_after=start_after), clamp_limit(limit))

    def all_tokens(self, start_after=None, limit=None):
        return islice(self.state.tokens.scan(start_after=start_after), clamp_limit(limit))
