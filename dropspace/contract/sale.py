from dropspace import config
from dropspace.exceptions import SaleInactive, IncorrectFunds
from dropspace.execution.response import BankMsg, Coin
from dropspace.stdlib.math import checked_add, checked_sub, checked_mul, saturating_sub, as_uint
from dropspace.logger import get_logger

log = get_logger('Sale')


class Purchase:
    """Outcome of a buy or reserve: what was minted and every fund movement it requires."""
    def __init__(self, buyer, requested, token_ids, refund=0, payouts=None):
        self.buyer = buyer
        self.requested = requested
        self.token_ids = token_ids
        self.refund = refund
        self.payouts = payouts or []

    @property
    def quantity(self):
        return len(self.token_ids)

    @property
    def remainder(self):
        return self.requested - self.quantity

    def messages(self):
        msgs = []
        if self.refund > 0:
            msgs.append(BankMsg(to_address=self.buyer, amount=[Coin(self.refund)]))

        for to_address, amount in self.payouts:
            if amount > 0:
                msgs.append(BankMsg(to_address=to_address, amount=[Coin(amount)]))

        return msgs

    def to_dict(self):
        return {
            'minted': self.quantity,
            'token_ids': list(self.token_ids),
            'refund': str(self.refund),
            'payouts': [{'to_address': a, 'amount': str(n)} for a, n in self.payouts],
        }


class Sale:
    def __init__(self, state, registry, ownership):
        self.state = state
        self.registry = registry
        self.ownership = ownership

    def toggle_sale_active(self, caller):
        self.ownership.assert_caller_is_owner(caller)

        sale_active = not self.state.sale_active.get()
        self.state.sale_active.set(sale_active)

        log.info('Sale active set to {} by {}'.format(sale_active, caller))
        return sale_active

    def total_fee(self):
        return checked_add(self.state.mint_fee.get(), self.state.dev_fee.get())

    def clamp(self, requested):
        # Never rejects for lack of room; truncates to whatever capacity is left
        remaining = saturating_sub(self.state.supply_limit.get(), self.state.total_supply.get())
        return min(requested, self.state.mint_per_tx.get(), remaining)

    def buy(self, caller, qty, sent_funds, extension=None) -> Purchase:
        if not self.state.sale_active.get():
            raise SaleInactive()

        requested = as_uint(qty)
        mint_fee = self.state.mint_fee.get()
        dev_fee = self.state.dev_fee.get()
        total_fee = self.total_fee()

        required = checked_mul(requested, total_fee, limit=config.U128_MAX)
        if sent_funds < required:
            raise IncorrectFunds(sent=sent_funds, required=required)

        real_purchase = self.clamp(requested)

        token_ids = self.registry.mint_serial(caller, real_purchase, extension)

        # Refund covers every unfulfilled unit plus any overpayment
        spent = checked_mul(total_fee, real_purchase, limit=config.U128_MAX)
        refund = checked_sub(sent_funds, spent, limit=config.U128_MAX)

        withdraw_address = self.state.withdraw_address.get() or caller
        dev_wallet = self.state.dev_wallet.get() or caller

        payouts = [
            (withdraw_address, checked_mul(mint_fee, real_purchase, limit=config.U128_MAX)),
            (dev_wallet, checked_mul(dev_fee, real_purchase, limit=config.U128_MAX)),
        ]

        log.info('{} bought {} of {} requested, refund {}'.format(caller, real_purchase, requested, refund))
        return Purchase(caller, requested, token_ids, refund=refund, payouts=payouts)

    def reserve(self, caller, qty, extension=None) -> Purchase:
        self.ownership.assert_caller_is_owner(caller)

        requested = as_uint(qty)
        real_purchase = self.clamp(requested)

        reserved_amount = checked_add(self.state.reserved_amount.get(), real_purchase)
        token_ids = self.registry.mint_serial(caller, real_purchase, extension)
        self.state.reserved_amount.set(reserved_amount)

        log.info('{} reserved {} of {} requested'.format(caller, real_purchase, requested))
        return Purchase(caller, requested, token_ids)
