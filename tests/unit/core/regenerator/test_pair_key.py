#!/usr/bin/env python3
"""
Tests for PairKey normalization.
"""

import unittest

from core.regenerator import PairKey


class TestPairKey(unittest.TestCase):

    def test_of_is_order_independent(self):
        self.assertEqual(PairKey.of("bob", "alice"), PairKey.of("alice", "bob"))
        self.assertEqual(PairKey.of("bob", "alice").as_tuple(), ("alice", "bob"))

    def test_same_user_is_rejected(self):
        with self.assertRaises(ValueError):
            PairKey.of("alice", "alice")

    def test_unsorted_direct_construction_is_rejected(self):
        with self.assertRaises(ValueError):
            PairKey("bob", "alice")

    def test_other(self):
        key = PairKey.of("alice", "bob")

        self.assertEqual(key.other("alice"), "bob")
        self.assertEqual(key.other("bob"), "alice")
        with self.assertRaises(ValueError):
            key.other("carol")

    def test_membership_and_str(self):
        key = PairKey.of("u2", "u1")

        self.assertIn("u1", key)
        self.assertNotIn("u3", key)
        self.assertEqual(str(key), "u1:u2")

    def test_usable_as_dict_key(self):
        seen = {PairKey.of("a", "b"): 1}

        self.assertIn(PairKey.of("b", "a"), seen)


if __name__ == '__main__':
    unittest.main()
