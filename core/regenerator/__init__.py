"""Regenerator Module - materializes match suggestions from the scorer."""
from core.exceptions import (
    MatchingError, ProfileNotFound, StoreUnavailable,
    PairWriteConflict, InvalidProfileData
)
from core.regenerator.pair_key import PairKey
from core.regenerator.models import (
    MatchStatus, MatchSuggestionRecord, RegenerationResult,
    BatchRegenerationResult, RankedSuggestion, PairPreview
)
from core.regenerator.interfaces import ProfileStore, MatchStore
from core.regenerator.service import MatchRegenerator
from core.regenerator.suggestions import SuggestionService

__all__ = [
    'MatchRegenerator', 'SuggestionService',
    'ProfileStore', 'MatchStore', 'PairKey',
    'MatchStatus', 'MatchSuggestionRecord', 'RegenerationResult',
    'BatchRegenerationResult', 'RankedSuggestion', 'PairPreview',
    'MatchingError', 'ProfileNotFound', 'StoreUnavailable',
    'PairWriteConflict', 'InvalidProfileData'
]
