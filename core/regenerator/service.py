#!/usr/bin/env python3
"""
Match Regenerator - recompute and reconcile stored match suggestions.

For one user:
- Load the user's profile and every other profile
- Qualify each candidate and compute the pair score (higher of both directions)
- Diff the qualifying set against the user's stored rows:
  delete stale 'suggestion' rows, create missing ones, update changed scores
- Leave rows whose status has advanced past 'suggestion' untouched

regenerate_all() runs the same for every profile, sequentially or on a
thread pool, isolating failures per user.
"""

import time
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional

from core.config_loader import RegenerationConfig
from core.exceptions import PairWriteConflict, StoreUnavailable
from core.regenerator.interfaces import ProfileStore, MatchStore
from core.regenerator.models import (
    BatchRegenerationResult,
    MatchSuggestionRecord,
    RegenerationResult,
)
from core.regenerator.pair_key import PairKey
from core.scorer import CompatibilityScorer, Profile

logger = logging.getLogger(__name__)


class MatchRegenerator:
    """
    Keeps MatchSuggestion rows in line with the compatibility rules.

    Stores are injected so tests can substitute an in-memory fake.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        match_store: MatchStore,
        scorer: Optional[CompatibilityScorer] = None,
        config: Optional[RegenerationConfig] = None
    ):
        self.profile_store = profile_store
        self.match_store = match_store
        self.scorer = scorer or CompatibilityScorer()
        self.config = config or RegenerationConfig()

    def evaluate_candidates(
        self,
        subject: Profile,
        candidates: List[Profile]
    ) -> Dict[str, int]:
        """Pair score of every qualifying candidate for subject, keyed by user_id."""
        targets: Dict[str, int] = {}
        for candidate in candidates:
            if candidate.user_id == subject.user_id:
                continue
            if not self.scorer.qualifies(subject, candidate):
                continue
            score = self.scorer.pair_score(subject, candidate)
            logger.debug(f"Qualifying pair {subject.user_id} <-> {candidate.user_id} (score: {score})")
            targets[candidate.user_id] = score
        return targets

    def regenerate_for_user(self, user_id: str) -> RegenerationResult:
        """Recompute and reconcile every suggestion involving user_id.

        Safe to re-run: with unchanged profiles a second call performs no writes.

        Raises:
            StoreUnavailable: if profiles or existing rows cannot be loaded
        """
        result = RegenerationResult(user_id=user_id)

        subject = self.profile_store.get_profile(user_id)
        if subject is None:
            logger.info(f"No profile found for user {user_id}; nothing to regenerate")
            result.profile_found = False
            return result

        candidates = self.profile_store.list_profiles_except(user_id)
        result.candidates_checked = len(candidates)
        logger.info(f"Regenerating matches for user {user_id}: checking {len(candidates)} candidates")

        targets = self.evaluate_candidates(subject, candidates)
        result.qualifying = len(targets)

        existing = self._existing_rows_by_counterpart(user_id)

        for other_id, row in existing.items():
            if row.is_suggestion and other_id not in targets:
                self._delete_stale(row, result)

        for other_id, score in targets.items():
            row = existing.get(other_id)
            if row is None:
                self._create(PairKey.of(user_id, other_id), score, result)
            elif row.is_suggestion:
                self._update(row, score, result)
            else:
                logger.debug(f"Pair {row.pair_key} has status '{row.status}'; leaving it untouched")
                result.preserved += 1

        logger.info(
            f"Regenerated matches for user {user_id}: qualifying={result.qualifying}, "
            f"created={result.created}, updated={result.updated}, deleted={result.deleted}, "
            f"unchanged={result.unchanged}, preserved={result.preserved}, failed={len(result.failed_pairs)}"
        )
        return result

    def regenerate_all(self, stop_event: Optional[threading.Event] = None) -> BatchRegenerationResult:
        """Regenerate suggestions for every known profile.

        A failure on one user is logged and recorded in the result; the
        remaining users are still processed. Setting stop_event stops the
        batch before the next user starts.

        Raises:
            StoreUnavailable: if the list of profiles cannot be loaded
        """
        start_time = time.time()
        batch = BatchRegenerationResult()

        user_ids = [p.user_id for p in self.profile_store.list_all_profiles()]
        batch.users_total = len(user_ids)
        logger.info(f"Regenerating matches for all {len(user_ids)} profiles (workers={self.config.max_workers})")

        if self.config.max_workers > 1:
            self._run_parallel(user_ids, batch, stop_event)
        else:
            self._run_sequential(user_ids, batch, stop_event)

        batch.execution_time = time.time() - start_time
        logger.info(
            f"Completed regeneration: processed={batch.users_processed}/{batch.users_total}, "
            f"failed={len(batch.failures)}, cancelled={batch.cancelled}, "
            f"time={batch.execution_time:.2f}s"
        )
        return batch

    def _existing_rows_by_counterpart(self, user_id: str) -> Dict[str, MatchSuggestionRecord]:
        rows = self.match_store.list_suggestions_for_user(user_id)
        by_counterpart: Dict[str, MatchSuggestionRecord] = {}
        for row in rows:
            if user_id not in row.pair_key:
                logger.warning(f"Store returned pair {row.pair_key} for user {user_id}; ignoring")
                continue
            by_counterpart[row.other_user(user_id)] = row
        return by_counterpart

    def _delete_stale(self, row: MatchSuggestionRecord, result: RegenerationResult) -> None:
        try:
            self.match_store.delete_suggestion(row.id)
            result.deleted += 1
        except (PairWriteConflict, StoreUnavailable) as e:
            logger.warning(f"Skipping delete of pair {row.pair_key}: {e}")
            result.failed_pairs.append(str(row.pair_key))

    def _create(self, pair_key: PairKey, score: int, result: RegenerationResult) -> None:
        try:
            self.match_store.create_suggestion(pair_key, score)
            result.created += 1
        except (PairWriteConflict, StoreUnavailable) as e:
            logger.warning(f"Skipping create of pair {pair_key}: {e}")
            result.failed_pairs.append(str(pair_key))

    def _update(self, row: MatchSuggestionRecord, score: int, result: RegenerationResult) -> None:
        if row.compatibility_score == score:
            result.unchanged += 1
            return
        try:
            self.match_store.update_suggestion_score(row.id, score)
            result.updated += 1
        except (PairWriteConflict, StoreUnavailable) as e:
            logger.warning(f"Skipping score update of pair {row.pair_key}: {e}")
            result.failed_pairs.append(str(row.pair_key))

    def _regenerate_isolated(self, user_id: str, batch: BatchRegenerationResult) -> Optional[RegenerationResult]:
        try:
            return self.regenerate_for_user(user_id)
        except Exception as e:
            logger.exception(f"Error regenerating matches for user {user_id}")
            batch.failures[user_id] = str(e)
            return None

    def _run_sequential(
        self,
        user_ids: List[str],
        batch: BatchRegenerationResult,
        stop_event: Optional[threading.Event]
    ) -> None:
        for user_id in user_ids:
            if stop_event is not None and stop_event.is_set():
                logger.info("Stop requested; ending regeneration batch early")
                batch.cancelled = True
                break
            result = self._regenerate_isolated(user_id, batch)
            if result is not None:
                batch.add(result)

    def _run_parallel(
        self,
        user_ids: List[str],
        batch: BatchRegenerationResult,
        stop_event: Optional[threading.Event]
    ) -> None:
        lock = threading.Lock()

        def work(user_id: str) -> None:
            if stop_event is not None and stop_event.is_set():
                with lock:
                    batch.cancelled = True
                return
            local = BatchRegenerationResult()
            result = self._regenerate_isolated(user_id, local)
            with lock:
                batch.failures.update(local.failures)
                if result is not None:
                    batch.add(result)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [executor.submit(work, user_id) for user_id in user_ids]
            for future in as_completed(futures):
                future.result()
