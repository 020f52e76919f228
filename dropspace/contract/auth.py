from dropspace.exceptions import NotOwner, Expired
from dropspace.stdlib.time import Expiration
from dropspace.contract.state import Approval, TokenRecord


class Authorization:
    """
    Read-only predicates deciding whether a caller may approve on behalf of,
    or send, a token. Expiry is evaluated against the block passed in on
    every call.
    """
    def __init__(self, state):
        self.state = state

    def operator_expiry(self, owner, operator):
        return self.state.operators[owner, operator]

    def is_live_operator(self, owner, operator, block):
        expires = self.operator_expiry(owner, operator)
        if expires is None:
            return False
        return not expires.is_expired(block)

    def check_can_approve(self, caller, token: TokenRecord, block):
        # owner can approve
        if token.owner == caller:
            return True

        # operator can approve
        if self.is_live_operator(token.owner, caller, block):
            return True

        raise NotOwner(caller=caller)

    def check_can_send(self, caller, token: TokenRecord, block):
        # owner can send
        if token.owner == caller:
            return True

        # any non-expired token approval can send
        if any(a.spender == caller and not a.is_expired(block) for a in token.approvals):
            return True

        # operator can send
        if self.is_live_operator(token.owner, caller, block):
            return True

        raise NotOwner(caller=caller)


def set_approval(token: TokenRecord, spender, expires, block):
    """Replaces any approval the spender already holds on token."""
    expires = Expiration.parse(expires)
    if expires.is_expired(block):
        raise Expired(expires=expires)

    revoke_approval(token, spender)
    token.approvals.append(Approval(spender=spender, expires=expires))
    return token


def revoke_approval(token: TokenRecord, spender):
    token.approvals = [a for a in token.approvals if a.spender != spender]
    return token


def set_operator_approval(state, owner, operator, expires, block):
    expires = Expiration.parse(expires)
    if expires.is_expired(block):
        raise Expired(expires=expires)

    state.operators[owner, operator] = expires
    return expires


def revoke_operator_approval(state, owner, operator):
    del state.operators[owner, operator]
