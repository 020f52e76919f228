from unittest import TestCase
from dropspace.db.driver import InMemDriver, ContractDriver


class TestInMemDriver(TestCase):
    def setUp(self):
        self.d = InMemDriver()

    def tearDown(self):
        self.d.flush()

    def test_get_set(self):
        self.d.set('b', 'a')

        self.assertEqual(self.d.get('b'), 'a')

    def test_get_missing_is_none(self):
        self.assertIsNone(self.d.get('nope'))

    def test_delete(self):
        self.d.set('b', 'a')
        self.d.delete('b')

        self.assertIsNone(self.d.get('b'))
        self.assertEqual(self.d.keys(), [])

    def test_set_none_deletes(self):
        self.d.set('b', 'a')
        self.d.set('b', None)

        self.assertIsNone(self.d.get('b'))

    def test_delete_missing_is_noop(self):
        self.d.delete('b')

        self.assertEqual(self.d.keys(), [])

    def test_scan_is_ordered_and_prefixed(self):
        self.d.set('a:3', 3)
        self.d.set('b:1', 4)
        self.d.set('a:1', 1)
        self.d.set('a:2', 2)

        self.assertEqual(list(self.d.scan('a:')), ['a:1', 'a:2', 'a:3'])

    def test_scan_start_after_is_exclusive(self):
        for k in ['a:1', 'a:2', 'a:3']:
            self.d.set(k, 1)

        self.assertEqual(list(self.d.scan('a:', start_after='a:1')), ['a:2', 'a:3'])

    def test_scan_start_after_before_prefix(self):
        self.d.set('a:9', 1)
        self.d.set('b:1', 1)

        self.assertEqual(list(self.d.scan('b:', start_after='a:9')), ['b:1'])

    def test_keys_sorted(self):
        self.d.set('c', 1)
        self.d.set('a', 1)
        self.d.set('b', 1)

        self.assertEqual(self.d.keys(), ['a', 'b', 'c'])

    def test_overwrite_does_not_duplicate_key(self):
        self.d.set('a', 1)
        self.d.set('a', 2)

        self.assertEqual(self.d.keys(), ['a'])
        self.assertEqual(self.d['a'], 2)

    def test_getitem_missing_raises(self):
        with self.assertRaises(KeyError):
            self.d['a']


class TestContractDriver(TestCase):
    def setUp(self):
        self.raw = InMemDriver()
        self.c = ContractDriver(driver=self.raw)

    def tearDown(self):
        self.c.flush()

    def test_make_key(self):
        self.assertEqual(self.c.make_key('c', 'v'), 'c.v')
        self.assertEqual(self.c.make_key('c', 'v', ['a', 'b']), 'c.v:a:b')

    def test_set_is_not_written_until_commit(self):
        self.c.set('x.y', 1)

        self.assertIsNone(self.raw.get('x.y'))
        self.assertEqual(self.c.get('x.y'), 1)

        self.c.commit()

        self.assertEqual(self.raw.get('x.y'), 1)

    def test_soft_apply_moves_pending_to_cache(self):
        self.c.set('x.y', 1)
        self.c.soft_apply()

        self.assertEqual(self.c.pending_writes, {})
        self.assertEqual(self.c.cache, {'x.y': 1})
        self.assertEqual(self.c.get('x.y'), 1)

    def test_clear_pending_state_keeps_cache(self):
        self.c.set('x.a', 1)
        self.c.soft_apply()

        self.c.set('x.b', 2)
        self.c.clear_pending_state()

        self.assertEqual(self.c.get('x.a'), 1)
        self.assertIsNone(self.c.get('x.b'))

    def test_rollback_discards_cache(self):
        self.c.set('x.a', 1)
        self.c.soft_apply()
        self.c.rollback()

        self.assertIsNone(self.c.get('x.a'))

    def test_delete_hides_committed_value(self):
        self.raw.set('x.t:1', 'v')

        self.c.delete('x.t:1')

        self.assertIsNone(self.c.get('x.t:1'))
        self.assertEqual(self.c.keys('x.t:'), [])

    def test_commit_applies_deletes(self):
        self.raw.set('x.t:1', 'v')

        self.c.delete('x.t:1')
        self.c.commit()

        self.assertIsNone(self.raw.get('x.t:1'))

    def test_scan_merges_pending_and_committed(self):
        self.raw.set('x.t:a', 1)
        self.raw.set('x.t:c', 3)
        self.c.set('x.t:b', 2)

        self.assertEqual(self.c.keys('x.t:'), ['x.t:a', 'x.t:b', 'x.t:c'])

    def test_scan_does_not_repeat_overwritten_keys(self):
        self.raw.set('x.t:a', 1)
        self.c.set('x.t:a', 2)

        self.assertEqual(self.c.keys('x.t:'), ['x.t:a'])
        self.assertEqual(self.c.get('x.t:a'), 2)

    def test_scan_start_after(self):
        self.raw.set('x.t:a', 1)
        self.raw.set('x.t:c', 3)
        self.c.set('x.t:b', 2)
        self.c.set('x.t:d', 4)

        self.assertEqual(list(self.c.scan('x.t:', start_after='x.t:a')), ['x.t:b', 'x.t:c', 'x.t:d'])

    def test_get_contract_keys(self):
        self.c.set('x.name', 'n')
        self.c.set(self.c.make_key('x', 'tokens', ['1']), {})
        self.c.set('y.name', 'other')

        self.assertEqual(self.c.get_contract_keys('x'), ['x.name', 'x.tokens:1'])

    def test_get_adds_to_pending_reads(self):
        self.c.get('thing')

        self.assertTrue('thing' in self.c.pending_reads)
