from dropspace.exceptions import UnknownMessage, NoOwner, NotOwner, NotPendingOwner, TransferNotFound, TransferExpired, Expired
from dropspace.stdlib.time import Expiration
from dropspace.logger import get_logger

log = get_logger('Ownership')


class Ownership:
    """
    Single privileged principal with two-phase hand-over. The pending slot is
    either empty (no transfer in flight) or holds a candidate and an expiry.
    """
    def __init__(self, state, api):
        self.state = state
        self.api = api

    def initialize(self, owner):
        self.state.owner.set(self.api.validate(owner) if owner is not None else None)
        self.state.pending_owner.remove()
        self.state.pending_expiry.remove()

    def current_owner(self):
        return self.state.owner.get()

    def pending(self):
        candidate = self.state.pending_owner.get()
        if candidate is None:
            return None
        return candidate, Expiration.parse(self.state.pending_expiry.get())

    def assert_caller_is_owner(self, caller):
        owner = self.current_owner()
        if owner is None:
            raise NoOwner()
        if caller != owner:
            raise NotOwner(caller=caller)

    def begin_transfer(self, caller, block, new_owner, expiry=None):
        self.assert_caller_is_owner(caller)

        new_owner = self.api.validate(new_owner)
        expiry = Expiration.parse(expiry)
        if expiry.is_expired(block):
            raise Expired(expires=expiry)

        self.state.pending_owner.set(new_owner)
        self.state.pending_expiry.set(expiry)

        log.info('Ownership transfer to {} proposed by {}'.format(new_owner, caller))

    def accept_transfer(self, caller, block):
        pending = self.pending()
        if pending is None:
            raise TransferNotFound()

        candidate, expiry = pending
        if caller != candidate:
            raise NotPendingOwner(caller=caller)
        if expiry.is_expired(block):
            raise TransferExpired()

        self.state.owner.set(candidate)
        self.state.pending_owner.remove()
        self.state.pending_expiry.remove()

        log.info('Ownership accepted by {}'.format(caller))

    def renounce(self, caller):
        self.assert_caller_is_owner(caller)

        self.state.owner.remove()
        self.state.pending_owner.remove()
        self.state.pending_expiry.remove()

        log.info('Ownership renounced by {}'.format(caller))

    def update(self, caller, block, action):
        # action is 'accept_ownership', 'renounce_ownership' or {'transfer_ownership': {...}}
        if action == 'accept_ownership':
            self.accept_transfer(caller, block)
        elif action == 'renounce_ownership':
            self.renounce(caller)
        elif isinstance(action, dict) and 'transfer_ownership' in action:
            args = action['transfer_ownership']
            self.begin_transfer(caller, block, args['new_owner'], args.get('expiry'))
        else:
            raise UnknownMessage(name=action)

        return self.info()

    def info(self):
        pending = self.pending()
        return {
            'owner': self.current_owner(),
            'pending_owner': pending[0] if pending else None,
            'pending_expiry': pending[1].to_dict() if pending else None,
        }

    def attributes(self):
        pending = self.pending()
        return [
            ('owner', self.current_owner() or 'none'),
            ('pending_owner', pending[0] if pending else 'none'),
            ('pending_expiry', pending[1] if pending else 'none'),
        ]
