from unittest import TestCase
from dropspace import config
from dropspace.db.driver import ContractDriver, InMemDriver
from dropspace.contract.state import NftState
from dropspace.contract.auth import Authorization
from dropspace.contract.registry import Registry, clamp_limit
from dropspace.stdlib.time import BlockInfo
from dropspace.exceptions import AlreadyExists, NotFound, NotOwner, SupplyLimitReached


class TestClampLimit(TestCase):
    def test_default(self):
        self.assertEqual(clamp_limit(None), config.DEFAULT_LIMIT)

    def test_capped(self):
        self.assertEqual(clamp_limit(5000), config.MAX_LIMIT)

    def test_passthrough(self):
        self.assertEqual(clamp_limit(3), 3)


class TestRegistry(TestCase):
    def setUp(self):
        self.driver = ContractDriver(driver=InMemDriver())
        self.state = NftState(self.driver)
        self.registry = Registry(self.state, Authorization(self.state))

        self.block = BlockInfo()

    def test_mint_records_token_and_index(self):
        token = self.registry.mint('petrify', 'medusa', token_uri='https://starships.example.com/1')

        self.assertEqual(token.owner, 'medusa')
        self.assertEqual(self.registry.load('petrify'), token)
        self.assertEqual(list(self.registry.tokens_by_owner('medusa')), ['petrify'])
        self.assertEqual(self.state.total_supply.get(), 1)
        self.assertEqual(self.registry.num_tokens(), 1)

    def test_mint_duplicate_id(self):
        self.registry.mint('petrify', 'medusa')

        with self.assertRaises(AlreadyExists):
            self.registry.mint('petrify', 'random')

        self.assertEqual(self.registry.load('petrify').owner, 'medusa')
        self.assertEqual(self.state.total_supply.get(), 1)
        self.assertEqual(list(self.registry.tokens_by_owner('random')), [])

    def test_mint_past_supply_limit(self):
        self.state.supply_limit.set(1)
        self.registry.mint('one', 'medusa')

        with self.assertRaises(SupplyLimitReached):
            self.registry.mint('two', 'medusa')

        self.assertFalse(self.registry.exists('two'))

    def test_mint_serial_numbering(self):
        minted = self.registry.mint_serial('alice', 2)

        self.assertEqual(minted, ['jarvis #1', 'jarvis #2'])
        self.assertEqual(self.registry.load('jarvis #2').token_uri, config.DEFAULT_BASE_URI + '2')

        minted = self.registry.mint_serial('bob', 1)

        self.assertEqual(minted, ['jarvis #3'])
        self.assertEqual(self.state.total_supply.get(), 3)

    def test_mint_serial_zero(self):
        self.assertEqual(self.registry.mint_serial('alice', 0), [])
        self.assertEqual(self.state.total_supply.get(), 0)

    def test_load_missing(self):
        with self.assertRaises(NotFound):
            self.registry.load('nothing')

    def test_transfer_moves_index(self):
        self.registry.mint('melt', 'venus')
        self.registry.transfer('melt', 'random', 'venus', self.block)

        self.assertEqual(self.registry.load('melt').owner, 'random')
        self.assertEqual(list(self.registry.tokens_by_owner('venus')), [])
        self.assertEqual(list(self.registry.tokens_by_owner('random')), ['melt'])

    def test_transfer_clears_approvals(self):
        self.registry.mint('melt', 'venus')
        self.registry.update_approvals('melt', 'venus', self.block, 'random', True)
        self.registry.transfer('melt', 'person', 'random', self.block)

        self.assertEqual(self.registry.load('melt').approvals, [])

    def test_transfer_by_stranger(self):
        self.registry.mint('melt', 'venus')

        with self.assertRaises(NotOwner):
            self.registry.transfer('melt', 'random', 'random', self.block)

        self.assertEqual(self.registry.load('melt').owner, 'venus')

    def test_transfer_missing_token(self):
        with self.assertRaises(NotFound):
            self.registry.transfer('melt', 'random', 'venus', self.block)

    def test_update_approvals_add_and_remove(self):
        self.registry.mint('melt', 'venus')

        token = self.registry.update_approvals('melt', 'venus', self.block, 'random', True, {'at_height': 99999})

        self.assertEqual([a.spender for a in token.approvals], ['random'])
        self.assertEqual([a.spender for a in self.registry.load('melt').approvals], ['random'])

        self.registry.update_approvals('melt', 'venus', self.block, 'random', False)

        self.assertEqual(self.registry.load('melt').approvals, [])

    def test_burn(self):
        self.registry.mint('melt', 'venus')
        self.registry.mint('grow', 'venus')
        self.registry.burn('melt', 'venus', self.block)

        self.assertFalse(self.registry.exists('melt'))
        self.assertEqual(list(self.registry.tokens_by_owner('venus')), ['grow'])
        self.assertEqual(self.registry.num_tokens(), 1)

        # serial numbering keeps advancing past burned tokens
        self.assertEqual(self.state.total_supply.get(), 2)

    def test_burn_by_stranger(self):
        self.registry.mint('melt', 'venus')

        with self.assertRaises(NotOwner):
            self.registry.burn('melt', 'random', self.block)

        self.assertTrue(self.registry.exists('melt'))

    def test_all_tokens_is_lexicographic(self):
        for token_id in ['1', '2', '3', '10']:
            self.registry.mint(token_id, 'venus')

        self.assertEqual(list(self.registry.all_tokens()), ['1', '10', '2', '3'])

    def test_all_tokens_pagination(self):
        for token_id in ['1', '2', '3', '10']:
            self.registry.mint(token_id, 'venus')

        self.assertEqual(list(self.registry.all_tokens(limit=2)), ['1', '10'])
        self.assertEqual(list(self.registry.all_tokens(start_after='10', limit=2)), ['2', '3'])
        self.assertEqual(list(self.registry.all_tokens(start_after='3')), [])

    def test_default_page_size(self):
        for i in range(15):
            self.registry.mint('t{:02d}'.format(i), 'venus')

        self.assertEqual(len(list(self.registry.tokens_by_owner('venus'))), config.DEFAULT_LIMIT)
        self.assertEqual(len(list(self.registry.tokens_by_owner('venus', start_after='t09'))), 5)

    def test_tokens_by_owner_sees_committed_and_pending(self):
        self.registry.mint('b', 'venus')
        self.driver.commit()

        self.registry.mint('a', 'venus')
        self.registry.mint('c', 'venus')

        self.assertEqual(list(self.registry.tokens_by_owner('venus')), ['a', 'b', 'c'])

    def test_page_size_ceiling(self):
        for i in range(1005):
            self.registry.mint('t{:04d}'.format(i), 'venus')

        page = list(self.registry.all_tokens(limit=5000))

        self.assertEqual(len(page), config.MAX_LIMIT)
        self.assertEqual(page[0], 't0000')
        self.assertEqual(page[-1], 't0999')

        rest = list(self.registry.all_tokens(start_after=page[-1], limit=5000))

        self.assertEqual(rest, ['t1000', 't1001', 't1002', 't1003', 't1004'])
        self.assertEqual(len(list(self.registry.tokens_by_owner('venus', limit=5000))), config.MAX_LIMIT)

    def test_token_ids_with_delimiters(self):
        for token_id in ['nft.1', 'ipfs://Qm1', 'a:b']:
            self.registry.mint(token_id, 'venus')

        self.assertTrue(self.registry.exists('nft.1'))
        self.assertEqual(list(self.registry.all_tokens()), ['a:b', 'ipfs://Qm1', 'nft.1'])
        self.assertEqual(list(self.registry.tokens_by_owner('venus', start_after='a:b')), ['ipfs://Qm1', 'nft.1'])

        self.registry.transfer('a:b', 'random', 'venus', self.block)

        self.assertEqual(list(self.registry.tokens_by_owner('random')), ['a:b'])

    def test_mint_serial_skips_taken_ids(self):
        self.registry.mint('jarvis #2', 'merlin')

        self.assertEqual(self.registry.mint_serial('alice', 2), ['jarvis #3', 'jarvis #4'])
        self.assertEqual(self.registry.load('jarvis #3').token_uri, config.DEFAULT_BASE_URI + '3')
        self.assertEqual(self.state.total_supply.get(), 3)

    def test_mint_serial_with_dotted_base(self):
        self.state.token_id_base.set('Jarvis v1.')

        self.assertEqual(self.registry.mint_serial('alice', 1), ['Jarvis v1.1'])
