from .base import Base
from .profile import UserProfile
from .match import MatchSuggestion

__all__ = [
    'Base',
    'UserProfile',
    'MatchSuggestion',
]
