#!/usr/bin/env python3
"""
Test suite for CompatibilityScorer.
"""

import unittest

from core.config_loader import MatchingConfig, ScoringWeights
from core.scorer import CompatibilityScorer, Profile


class TestCompatibilityScorer(unittest.TestCase):

    def setUp(self):
        self.scorer = CompatibilityScorer()
        self.subject = Profile(user_id="alice", courses=["CS101"], interests=["Statistics"])

    def test_evaluate_qualifying_pair(self):
        candidate = Profile(user_id="bob", courses=["Statistics"], interests=["cs101"], major="Math")

        scored = self.scorer.evaluate(self.subject, candidate)

        self.assertTrue(scored.qualifies)
        self.assertEqual(scored.user_id, "bob")
        # teaching 50 + learning 50 + major present 5 + completeness 70% -> +5
        self.assertEqual(scored.breakdown.raw_total, 110)
        self.assertEqual(scored.score, 100)
        self.assertEqual(scored.completeness, 70)

    def test_evaluate_non_qualifying_pair_is_not_scored(self):
        candidate = Profile(user_id="bob", interests=["Statistics"], major="Math")

        scored = self.scorer.evaluate(self.subject, candidate)

        self.assertFalse(scored.qualifies)
        self.assertEqual(scored.score, 0)
        self.assertEqual(scored.breakdown.contributions, {})
        self.assertEqual(scored.breakdown.candidate_completeness, 45)

    def test_evaluate_without_qualification_scores_anyway(self):
        a = Profile(user_id="a", interests=["Machine Learning"])
        b = Profile(user_id="b", interests=["Machine Learning"])

        scored = self.scorer.evaluate(a, b, require_qualification=False)

        self.assertFalse(scored.qualifies)
        self.assertEqual(scored.score, 40)

    def test_pair_score_is_order_independent(self):
        # alice is 50% complete, bob only 25%: the directional scores differ
        a = Profile(user_id="alice", courses=["CS101"], interests=["Art"])
        b = Profile(user_id="bob", interests=["cs101"])

        forward, _ = self.scorer.score(a, b)
        backward, _ = self.scorer.score(b, a)

        self.assertEqual((forward, backward), (50, 55))
        self.assertEqual(self.scorer.pair_score(a, b), 55)
        self.assertEqual(self.scorer.pair_score(b, a), 55)

    def test_config_weights_are_applied(self):
        scorer = CompatibilityScorer(MatchingConfig(scoring=ScoringWeights(mutual_teaching=30)))
        candidate = Profile(user_id="bob", interests=["CS101"])

        score, breakdown = scorer.score(self.subject, candidate)

        self.assertEqual(score, 30)
        self.assertEqual(breakdown.contributions['mutual_teaching'], 30)


if __name__ == '__main__':
    unittest.main()
