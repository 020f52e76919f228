"""
The dropspace NFT contract: a cw721-style ledger with a public sale.

Every exported method takes the execution Context first. Execute handlers
return a Response; query handlers return a plain projection. Handlers
validate before they write so a failure leaves nothing to discard beyond
what the executor already drops.
"""
from dropspace import config
from dropspace.exceptions import NoWithdrawAddress, InvalidSupplyLimit
from dropspace.execution.response import Response, Coin, BankMsg, ReceiveNftMsg
from dropspace.stdlib.access import export
from dropspace.stdlib.address import AddressValidator
from dropspace.stdlib.math import as_uint
from dropspace.contract.state import NftState
from dropspace.contract.ownership import Ownership
from dropspace.contract.auth import Authorization, set_operator_approval, revoke_operator_approval
from dropspace.contract.registry import Registry
from dropspace.contract.sale import Sale
from dropspace.contract.query import Queries
from dropspace.logger import get_logger

EXECUTE = config.EXECUTE_EXPORT
QUERY = config.QUERY_EXPORT

log = get_logger('Contract')


def _default(value, fallback):
    return fallback if value is None else value


def _minted(minter, purchase):
    # One token_id attribute per unit, as an individual mint would emit
    pairs = [('minter', minter), ('owner', purchase.buyer)]
    pairs.extend(('token_id', token_id) for token_id in purchase.token_ids)
    return pairs


class NftContract:
    def __init__(self, driver, name=config.CONTRACT_NAME, api=None):
        self.api = api or AddressValidator()
        self.state = NftState(driver, contract=name)
        self.admin = Ownership(self.state, self.api)
        self.auth = Authorization(self.state)
        self.registry = Registry(self.state, self.auth)
        self.sale = Sale(self.state, self.registry, self.admin)
        self.queries = Queries(self.state, self.registry, self.admin, self.api)

    def instantiate(self, ctx, name, symbol, minter=None, withdraw_address=None, base_uri=None,
                    token_id_base=None, mint_per_tx=None, mint_fee=None, dev_fee=None, supply_limit=None,
                    reserved_amount=None, dev_wallet=None, sale_time=None):
        owner = self.api.validate(_default(minter, ctx.caller))
        withdraw_address = self.api.maybe_validate(withdraw_address)
        dev_wallet = self.api.validate(_default(dev_wallet, ctx.caller))

        self.state.name.set(name)
        self.state.symbol.set(symbol)
        self.state.base_uri.set(_default(base_uri, config.DEFAULT_BASE_URI))
        self.state.token_id_base.set(_default(token_id_base, config.DEFAULT_TOKEN_ID_BASE))
        self.state.mint_per_tx.set(as_uint(_default(mint_per_tx, config.DEFAULT_MINT_PER_TX)))
        self.state.mint_fee.set(as_uint(_default(mint_fee, config.DEFAULT_MINT_FEE)))
        self.state.dev_fee.set(as_uint(_default(dev_fee, config.DEFAULT_DEV_FEE)))
        self.state.supply_limit.set(as_uint(_default(supply_limit, config.DEFAULT_SUPPLY_LIMIT)))
        self.state.total_supply.set(0)
        self.state.reserved_amount.set(as_uint(_default(reserved_amount, config.DEFAULT_RESERVED_AMOUNT)))
        self.state.dev_wallet.set(dev_wallet)
        self.state.sale_time.set(as_uint(_default(sale_time, config.DEFAULT_SALE_TIME)))
        self.state.sale_active.set(False)

        if withdraw_address is not None:
            self.state.withdraw_address.set(withdraw_address)

        self.admin.initialize(owner)

        log.info('Instantiated {} ({}) with minter {}'.format(name, symbol, owner))
        return Response() \
            .add_attribute('action', 'instantiate') \
            .add_attribute('minter', owner)

    # ==================== Tokens ====================

    @export(EXECUTE)
    def mint(self, ctx, token_id, owner, token_uri=None, extension=None):
        self.admin.assert_caller_is_owner(ctx.caller)
        owner = self.api.validate(owner)

        self.registry.mint(token_id, owner, token_uri=token_uri, extension=extension)

        return Response() \
            .add_attribute('action', 'mint') \
            .add_attribute('minter', ctx.caller) \
            .add_attribute('owner', owner) \
            .add_attribute('token_id', token_id)

    @export(EXECUTE)
    def transfer_nft(self, ctx, recipient, token_id):
        recipient = self.api.validate(recipient)
        self.registry.transfer(token_id, recipient, ctx.caller, ctx.block)

        return Response() \
            .add_attribute('action', 'transfer_nft') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('recipient', recipient) \
            .add_attribute('token_id', token_id)

    @export(EXECUTE)
    def send_nft(self, ctx, contract, token_id, msg=None):
        contract = self.api.validate(contract)
        self.registry.transfer(token_id, contract, ctx.caller, ctx.block)

        return Response() \
            .add_message(ReceiveNftMsg(contract=contract, sender=ctx.caller, token_id=token_id, msg=msg)) \
            .add_attribute('action', 'send_nft') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('recipient', contract) \
            .add_attribute('token_id', token_id)

    @export(EXECUTE)
    def approve(self, ctx, spender, token_id, expires=None):
        spender = self.api.validate(spender)
        self.registry.update_approvals(token_id, ctx.caller, ctx.block, spender, True, expires)

        return Response() \
            .add_attribute('action', 'approve') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('spender', spender) \
            .add_attribute('token_id', token_id)

    @export(EXECUTE)
    def revoke(self, ctx, spender, token_id):
        spender = self.api.validate(spender)
        self.registry.update_approvals(token_id, ctx.caller, ctx.block, spender, False)

        return Response() \
            .add_attribute('action', 'revoke') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('spender', spender) \
            .add_attribute('token_id', token_id)

    @export(EXECUTE)
    def approve_all(self, ctx, operator, expires=None):
        operator = self.api.validate(operator)
        set_operator_approval(self.state, ctx.caller, operator, expires, ctx.block)

        return Response() \
            .add_attribute('action', 'approve_all') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('operator', operator)

    @export(EXECUTE)
    def revoke_all(self, ctx, operator):
        operator = self.api.validate(operator)
        revoke_operator_approval(self.state, ctx.caller, operator)

        return Response() \
            .add_attribute('action', 'revoke_all') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('operator', operator)

    @export(EXECUTE)
    def burn(self, ctx, token_id):
        self.registry.burn(token_id, ctx.caller, ctx.block)

        return Response() \
            .add_attribute('action', 'burn') \
            .add_attribute('sender', ctx.caller) \
            .add_attribute('token_id', token_id)

    # ==================== Sale ====================

    @export(EXECUTE)
    def buy(self, ctx, qty, extension=None):
        purchase = self.sale.buy(ctx.caller, qty, ctx.sent_funds(config.DENOM), extension)

        response = Response()
        for msg in purchase.messages():
            response.add_message(msg)

        return response \
            .add_attribute('action', 'buy') \
            .add_attribute('buyer', ctx.caller) \
            .add_attribute('requested', purchase.requested) \
            .add_attribute('minted', purchase.quantity) \
            .add_attribute('refund', purchase.refund) \
            .add_attributes(_minted(ctx.caller, purchase)) \
            .set_data(purchase.to_dict())

    @export(EXECUTE)
    def reserve(self, ctx, qty, extension=None):
        purchase = self.sale.reserve(ctx.caller, qty, extension)

        return Response() \
            .add_attribute('action', 'reserve') \
            .add_attribute('new_reserved', purchase.quantity) \
            .add_attribute('total_reserved_amount', self.state.reserved_amount.get()) \
            .add_attributes(_minted(ctx.caller, purchase)) \
            .set_data(purchase.to_dict())

    @export(EXECUTE)
    def toggle_sale_active(self, ctx):
        sale_active = self.sale.toggle_sale_active(ctx.caller)

        return Response() \
            .add_attribute('action', 'toggle_sale_active') \
            .add_attribute('sale_active', str(sale_active).lower())

    @export(EXECUTE)
    def withdraw_funds(self, ctx, amount):
        address = self.state.withdraw_address.get()
        if address is None:
            raise NoWithdrawAddress()

        amount = Coin.parse(amount)

        return Response() \
            .add_message(BankMsg(to_address=address, amount=[amount])) \
            .add_attribute('action', 'withdraw_funds') \
            .add_attribute('amount', amount.amount) \
            .add_attribute('denom', amount.denom)

    # ==================== Admin ====================

    @export(EXECUTE)
    def update_ownership(self, ctx, action):
        self.admin.update(ctx.caller, ctx.block, action)
        return Response().add_attributes(self.admin.attributes())

    def _set(self, ctx, field, value, attribute=None):
        getattr(self.state, field).set(value)

        log.info('{} set to {} by {}'.format(field, value, ctx.caller))
        return Response() \
            .add_attribute('action', 'set_{}'.format(field)) \
            .add_attribute(attribute or field, value)

    @export(EXECUTE)
    def set_withdraw_address(self, ctx, address):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'withdraw_address', self.api.validate(address), attribute='address')

    @export(EXECUTE)
    def remove_withdraw_address(self, ctx):
        self.admin.assert_caller_is_owner(ctx.caller)

        address = self.state.withdraw_address.get()
        if address is None:
            raise NoWithdrawAddress()

        self.state.withdraw_address.remove()

        return Response() \
            .add_attribute('action', 'remove_withdraw_address') \
            .add_attribute('address', address)

    @export(EXECUTE)
    def set_dev_wallet(self, ctx, address):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'dev_wallet', self.api.validate(address), attribute='address')

    @export(EXECUTE)
    def set_name(self, ctx, name):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'name', name)

    @export(EXECUTE)
    def set_symbol(self, ctx, symbol):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'symbol', symbol)

    @export(EXECUTE)
    def set_base_uri(self, ctx, base_uri):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'base_uri', base_uri)

    @export(EXECUTE)
    def set_token_id_base(self, ctx, token_id_base):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'token_id_base', token_id_base)

    @export(EXECUTE)
    def set_mint_per_tx(self, ctx, tx):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'mint_per_tx', as_uint(tx))

    @export(EXECUTE)
    def set_mint_fee(self, ctx, fee):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'mint_fee', as_uint(fee))

    @export(EXECUTE)
    def set_dev_fee(self, ctx, fee):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'dev_fee', as_uint(fee))

    @export(EXECUTE)
    def set_supply_limit(self, ctx, supply_limit):
        self.admin.assert_caller_is_owner(ctx.caller)

        supply_limit = as_uint(supply_limit)
        total_supply = self.state.total_supply.get()
        if supply_limit < total_supply:
            raise InvalidSupplyLimit(supply_limit=supply_limit, total_supply=total_supply)

        return self._set(ctx, 'supply_limit', supply_limit)

    @export(EXECUTE)
    def set_sale_time(self, ctx, sale_time):
        self.admin.assert_caller_is_owner(ctx.caller)
        return self._set(ctx, 'sale_time', as_uint(sale_time))

    # ==================== Queries ====================

    @export(QUERY)
    def minter(self, ctx):
        return self.queries.minter()

    @export(QUERY)
    def contract_info(self, ctx):
        return self.queries.contract_info()

    @export(QUERY)
    def nft_info(self, ctx, token_id):
        return self.queries.nft_info(token_id)

    @export(QUERY)
    def owner_of(self, ctx, token_id, include_expired=False):
        return self.queries.owner_of(token_id, ctx.block, include_expired)

    @export(QUERY)
    def all_nft_info(self, ctx, token_id, include_expired=False):
        return self.queries.all_nft_info(token_id, ctx.block, include_expired)

    @export(QUERY)
    def operator(self, ctx, owner, operator, include_expired=False):
        return self.queries.operator(owner, operator, ctx.block, include_expired)

    @export(QUERY)
    def all_operators(self, ctx, owner, include_expired=False, start_after=None, limit=None):
        return self.queries.all_operators(owner, ctx.block, include_expired, start_after, limit)

    @export(QUERY)
    def num_tokens(self, ctx):
        return self.queries.num_tokens()

    @export(QUERY)
    def tokens(self, ctx, owner, start_after=None, limit=None):
        return self.queries.tokens(owner, start_after, limit)

    @export(QUERY)
    def all_tokens(self, ctx, start_after=None, limit=None):
        return self.queries.all_tokens(start_after, limit)

    @export(QUERY)
    def approval(self, ctx, token_id, spender, include_expired=False):
        return self.queries.approval(token_id, spender, ctx.block, include_expired)

    @export(QUERY)
    def approvals(self, ctx, token_id, include_expired=False):
        return self.queries.approvals(token_id, ctx.block, include_expired)

    @export(QUERY)
    def ownership(self, ctx):
        return self.queries.ownership_info()

    @export(QUERY)
    def get_states(self, ctx):
        return self.queries.states()

    @export(QUERY)
    def get_mint_price(self, ctx):
        return self.queries.mint_price()

    @export(QUERY)
    def get_name(self, ctx):
        return self.state.name.get()

    @export(QUERY)
    def get_symbol(self, ctx):
        return self.state.symbol.get()

    @export(QUERY)
    def get_base_uri(self, ctx):
        return self.state.base_uri.get()

    @export(QUERY)
    def get_withdraw_address(self, ctx):
        return self.state.withdraw_address.get()

    @export(QUERY)
    def get_dev_wallet(self, ctx):
        return self.state.dev_wallet.get()

    @export(QUERY)
    def get_mint_per_tx(self, ctx):
        return self.state.mint_per_tx.get()

    @export(QUERY)
    def get_mint_fee(self, ctx):
        return self.state.mint_fee.get()

    @export(QUERY)
    def get_dev_fee(self, ctx):
        return self.state.dev_fee.get()

    @export(QUERY)
    def get_supply_limit(self, ctx):
        return self.state.supply_limit.get()

    @export(QUERY)
    def get_total_supply(self, ctx):
        return self.state.total_supply.get()

    @export(QUERY)
    def get_reserved_amount(self, ctx):
        return self.state.reserved_amount.get()

    @export(QUERY)
    def get_sale_time(self, ctx):
        return self.state.sale_time.get()

    @export(QUERY)
    def get_sale_active(self, ctx):
        return self.state.sale_active.get()
