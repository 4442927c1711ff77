#!/usr/bin/env python3
"""
Store adapters and regeneration against a real PostgreSQL database.

Run with: python -m pytest tests/integration -m db
"""

import threading
import unittest

import pytest
from sqlalchemy import text

from core.config_loader import RegenerationConfig
from core.exceptions import PairWriteConflict
from core.regenerator import MatchRegenerator, PairKey
from database.database import build_engine, build_session_factory
from database.stores import SqlMatchStore, SqlProfileStore
from database.uow import matching_uow


@pytest.mark.db
@pytest.mark.usefixtures("test_database")
class TestPostgresStores(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _bind_database(self, test_db_url):
        self.engine = build_engine(test_db_url)
        self.session_factory = build_session_factory(self.engine)
        with self.engine.begin() as conn:
            conn.execute(text("DELETE FROM match_suggestion"))
            conn.execute(text("DELETE FROM user_profile"))
        self.profile_store = SqlProfileStore(self.session_factory)
        self.match_store = SqlMatchStore(self.session_factory)
        yield
        self.engine.dispose()

    def save_profile(self, user_id, **fields):
        with matching_uow(self.session_factory) as repos:
            repos.profiles.save_profile(user_id, **fields)

    def test_duplicate_pair_is_a_conflict(self):
        key = PairKey.of("alice", "bob")
        self.match_store.create_suggestion(key, 50)

        with self.assertRaises(PairWriteConflict):
            self.match_store.create_suggestion(key, 70)

    def test_mixed_case_and_punctuated_ids_are_stored(self):
        self.save_profile("alice", courses=["CS101"])
        self.save_profile("Bob", interests=["cs101"])
        self.save_profile("user-2", interests=["CS101"])
        self.save_profile("user_1", courses=["CS101"])
        regenerator = MatchRegenerator(self.profile_store, self.match_store)

        batch = regenerator.regenerate_all()

        self.assertEqual(batch.failed_pairs, 0)
        self.assertIsNotNone(self.match_store.find_suggestion(PairKey.of("alice", "Bob")))
        self.assertIsNotNone(self.match_store.find_suggestion(PairKey.of("user_1", "user-2")))

    def test_concurrent_creates_leave_one_row(self):
        key = PairKey.of("alice", "bob")
        barrier = threading.Barrier(4)
        conflicts = []

        def create():
            barrier.wait()
            try:
                self.match_store.create_suggestion(key, 50)
            except PairWriteConflict:
                conflicts.append(key)

        threads = [threading.Thread(target=create) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(conflicts), 3)
        self.assertEqual(len(self.match_store.list_suggestions_for_user("alice")), 1)

    def test_parallel_full_rebuild(self):
        self.save_profile("alice", courses=["CS101"], interests=["Art"])
        self.save_profile("bob", courses=["Art"], interests=["cs101"])
        self.save_profile("carol", interests=["CS101"])
        regenerator = MatchRegenerator(
            self.profile_store, self.match_store, config=RegenerationConfig(max_workers=3)
        )

        first = regenerator.regenerate_all()
        second = regenerator.regenerate_all()

        self.assertTrue(first.success)
        self.assertEqual(
            {r.other_user("alice") for r in self.match_store.list_suggestions_for_user("alice")},
            {"bob", "carol"}
        )
        self.assertEqual(second.created + second.updated + second.deleted, 0)
        self.assertEqual(self.match_store.list_suggestions_for_user("bob")[0].compatibility_score, 100)


if __name__ == '__main__':
    unittest.main()
