from database.repositories.base import BaseRepository
from database.repositories.profile import ProfileRepository
from database.repositories.match import MatchSuggestionRepository

__all__ = [
    'BaseRepository',
    'ProfileRepository',
    'MatchSuggestionRepository',
]
