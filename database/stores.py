#!/usr/bin/env python3
"""
SQL Store Adapters - ProfileStore / MatchStore backed by SQLAlchemy.

Every call runs in its own unit of work, so each pair write is its own
transaction. ORM rows are converted to core DTOs before the session closes.

Error translation:
- IntegrityError on a write -> PairWriteConflict
- any other SQLAlchemyError -> StoreUnavailable
Reads are retried on OperationalError before giving up.
"""

import logging
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception_type,
    before_sleep_log
)

from core.config_loader import MatchingConfig, RegenerationConfig
from core.exceptions import InvalidProfileData, PairWriteConflict, StoreUnavailable
from core.regenerator.models import MatchSuggestionRecord
from core.regenerator.pair_key import PairKey
from core.scorer.models import Profile
from core.scorer.normalization import clean_optional, coerce_string_collection
from database.models import MatchSuggestion, UserProfile
from database.uow import matching_uow, MatchingRepositories

logger = logging.getLogger(__name__)


def _to_int_score(value: Any) -> int:
    if value is None:
        return 0
    return int(value)


def suggestion_to_record(row: MatchSuggestion) -> MatchSuggestionRecord:
    return MatchSuggestionRecord(
        id=str(row.id),
        pair_key=PairKey(row.user_id_a, row.user_id_b),
        compatibility_score=_to_int_score(row.compatibility_score),
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at
    )


class _SqlStoreBase:
    def __init__(
        self,
        session_factory: sessionmaker,
        retry_config: Optional[RegenerationConfig] = None
    ):
        self.session_factory = session_factory
        self.retry_config = retry_config or RegenerationConfig()

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(max(1, self.retry_config.load_retry_attempts)),
            wait=wait_fixed(self.retry_config.load_retry_wait_seconds),
            retry=retry_if_exception_type(OperationalError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )

    def _in_uow(self, fn: Callable[[MatchingRepositories], Any]) -> Any:
        with matching_uow(self.session_factory) as repos:
            return fn(repos)

    def _read(self, description: str, fn: Callable[[MatchingRepositories], Any]) -> Any:
        try:
            return self._retrying()(self._in_uow, fn)
        except SQLAlchemyError as e:
            logger.error(f"Store read failed ({description}): {e}")
            raise StoreUnavailable(f"Could not {description}: {e}") from e


class SqlProfileStore(_SqlStoreBase):
    """ProfileStore over the user_profile table."""

    def __init__(
        self,
        session_factory: sessionmaker,
        config: Optional[MatchingConfig] = None,
        retry_config: Optional[RegenerationConfig] = None
    ):
        super().__init__(session_factory, retry_config)
        self.config = config or MatchingConfig()

    def _collection(self, row: UserProfile, field_name: str) -> List[str]:
        try:
            return coerce_string_collection(getattr(row, field_name), field_name)
        except InvalidProfileData as e:
            logger.warning(f"Profile {row.user_id}: {e}; treating {field_name} as empty")
            return []

    def to_profile(self, row: UserProfile) -> Profile:
        unspecified = self.config.unspecified_values
        return Profile(
            user_id=row.user_id,
            courses=self._collection(row, 'courses'),
            interests=self._collection(row, 'interests'),
            major=clean_optional(row.major, unspecified),
            year=clean_optional(row.year, unspecified),
            learning_style=clean_optional(row.learning_style, unspecified),
            study_preference=clean_optional(row.study_preference, unspecified)
        )

    def get_profile(self, user_id: str) -> Optional[Profile]:
        def op(repos: MatchingRepositories) -> Optional[Profile]:
            row = repos.profiles.get_by_user_id(user_id)
            return self.to_profile(row) if row is not None else None
        return self._read(f"load profile {user_id}", op)

    def list_profiles_except(self, user_id: str) -> List[Profile]:
        def op(repos: MatchingRepositories) -> List[Profile]:
            return [self.to_profile(row) for row in repos.profiles.list_except(user_id)]
        return self._read(f"list candidate profiles for {user_id}", op)

    def list_all_profiles(self) -> List[Profile]:
        def op(repos: MatchingRepositories) -> List[Profile]:
            return [self.to_profile(row) for row in repos.profiles.list_all()]
        return self._read("list profiles", op)


class SqlMatchStore(_SqlStoreBase):
    """MatchStore over the match_suggestion table."""

    def _write(self, key: Any, fn: Callable[[MatchingRepositories], Any]) -> Any:
        try:
            return self._in_uow(fn)
        except IntegrityError as e:
            raise PairWriteConflict(key, str(e.orig)) from e
        except SQLAlchemyError as e:
            logger.error(f"Store write failed for {key}: {e}")
            raise StoreUnavailable(f"Could not write suggestion {key}: {e}") from e

    def find_suggestion(self, pair_key: PairKey) -> Optional[MatchSuggestionRecord]:
        def op(repos: MatchingRepositories) -> Optional[MatchSuggestionRecord]:
            row = repos.suggestions.get_by_pair(pair_key.user_id_a, pair_key.user_id_b)
            return suggestion_to_record(row) if row is not None else None
        return self._read(f"find suggestion {pair_key}", op)

    def list_suggestions_for_user(
        self,
        user_id: str,
        status: Optional[str] = None
    ) -> List[MatchSuggestionRecord]:
        def op(repos: MatchingRepositories) -> List[MatchSuggestionRecord]:
            rows = repos.suggestions.list_for_user(user_id, status=status)
            return [suggestion_to_record(row) for row in rows]
        return self._read(f"list suggestions for {user_id}", op)

    def create_suggestion(self, pair_key: PairKey, score: int) -> MatchSuggestionRecord:
        def op(repos: MatchingRepositories) -> MatchSuggestionRecord:
            row = repos.suggestions.create(pair_key.user_id_a, pair_key.user_id_b, score)
            logger.debug(f"Created suggestion {pair_key} (score: {score})")
            return suggestion_to_record(row)
        return self._write(pair_key, op)

    def update_suggestion_score(self, suggestion_id: str, score: int) -> None:
        def op(repos: MatchingRepositories) -> None:
            if repos.suggestions.update_score_if_suggestion(suggestion_id, score) == 0:
                raise PairWriteConflict(suggestion_id, "row is missing or no longer a suggestion")
        self._write(suggestion_id, op)

    def delete_suggestion(self, suggestion_id: str) -> None:
        def op(repos: MatchingRepositories) -> None:
            if repos.suggestions.delete_if_suggestion(suggestion_id) > 0:
                return
            if repos.suggestions.get_by_id(suggestion_id) is not None:
                raise PairWriteConflict(suggestion_id, "row is no longer a suggestion")
            logger.debug(f"Suggestion {suggestion_id} already deleted")
        self._write(suggestion_id, op)

    def update_status(self, suggestion_id: str, status: str) -> Optional[MatchSuggestionRecord]:
        """Advance a row's status. Used by the connection workflow, never by the regenerator."""
        def op(repos: MatchingRepositories) -> Optional[MatchSuggestionRecord]:
            row = repos.suggestions.update_status(suggestion_id, status)
            return suggestion_to_record(row) if row is not None else None
        return self._write(suggestion_id, op)
