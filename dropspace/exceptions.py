class DropspaceError(Exception):
    """
    The base exception for dropspace. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs

    def __eq__(self, other):
        return type(self) is type(other) and self.kwargs == other.kwargs

    def __hash__(self):
        return hash((type(self), tuple(sorted(self.kwargs.items()))))


class NotOwner(DropspaceError):
    """
    The caller holds neither ownership, a live approval
    nor a live operator grant for what it tried to do

    :ivar caller: The principal that sent the message
    """
    fmt = "Caller '{caller}' is not the owner"


class NoOwner(DropspaceError):
    fmt = 'Contract ownership has been renounced'


class NotPendingOwner(DropspaceError):
    fmt = "Caller '{caller}' is not the pending owner"


class TransferNotFound(DropspaceError):
    fmt = 'No ownership transfer is pending'


class TransferExpired(DropspaceError):
    fmt = 'Ownership transfer has expired'


class AlreadyExists(DropspaceError):
    """
    A token with this id has already been minted

    :ivar token_id: The id submitted to mint
    """
    fmt = "Token '{token_id}' already claimed"


class NotFound(DropspaceError):
    """
    Lookup of a token, approval or operator grant found nothing

    :ivar kind: What was looked up
    :ivar key: The key that was missing
    """
    fmt = "{kind} '{key}' not found"


class Expired(DropspaceError):
    fmt = 'Approval expiration {expires} has already passed'


class SaleInactive(DropspaceError):
    fmt = 'Sale is not active'


class IncorrectFunds(DropspaceError):
    """
    Payment does not cover the requested quantity

    :ivar sent: Amount received in the sale denom
    :ivar required: Amount required for the requested quantity
    """
    fmt = 'Incorrect funds: sent {sent}, required {required}'


class NoWithdrawAddress(DropspaceError):
    fmt = 'No withdraw address set'


class InvalidAddress(DropspaceError):
    fmt = "Invalid address '{address}': {reason}"


class Overflow(DropspaceError):
    fmt = 'Overflow: {operation} {a} {b}'


class SupplyLimitReached(DropspaceError):
    fmt = 'Supply limit of {supply_limit} reached'


class InvalidSupplyLimit(DropspaceError):
    fmt = 'Supply limit {supply_limit} is below total supply {total_supply}'


class InvalidKey(DropspaceError):
    fmt = "Illegal storage key '{key}': {reason}"


class UnknownMessage(DropspaceError):
    """
    The host routed a message that no exported handler accepts

    :ivar name: The message tag
    """
    fmt = "Unknown message '{name}'"


class InvalidTime(DropspaceError):
    fmt = "Invalid time '{value}': {reason}"


class InvalidExpiration(DropspaceError):
    """
    An expiration in a message is not one of never,
    at_height or at_time, or carries a bad value

    :ivar expires: The expiration as submitted
    :ivar reason: What is wrong with it
    """
    fmt = "Invalid expiration '{expires}': {reason}"


class InvalidInteger(DropspaceError):
    fmt = "Expected an unsigned integer, got '{value}'"
