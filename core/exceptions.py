"""
Matching exceptions shared by the scorer, the regenerator and the store adapters.
"""


class MatchingError(Exception):
    """Base exception for compatibility matching errors."""
    pass


class ProfileNotFound(MatchingError):
    """Raised when the subject user has no profile yet."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No profile found for user {user_id}")


class StoreUnavailable(MatchingError):
    """Raised when the profile or match store could not be reached or queried."""
    pass


class PairWriteConflict(MatchingError):
    """Raised when a create/update/delete on one pair's row fails."""

    def __init__(self, pair_key, message: str):
        self.pair_key = pair_key
        super().__init__(f"Write conflict for pair {pair_key}: {message}")


class InvalidProfileData(MatchingError):
    """Raised when a profile field cannot be read as a collection of strings."""

    def __init__(self, field_name: str, value):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Cannot interpret {field_name}={value!r} as a list of strings")
