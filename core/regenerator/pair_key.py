"""Order-independent key for an unordered pair of user ids."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PairKey:
    """
    Normalized (user_id_a, user_id_b) with user_id_a < user_id_b.

    Build with PairKey.of() so (A, B) and (B, A) give the same key.
    """
    user_id_a: str
    user_id_b: str

    def __post_init__(self):
        if self.user_id_a == self.user_id_b:
            raise ValueError(f"A pair needs two different users, got {self.user_id_a!r} twice")
        if self.user_id_a > self.user_id_b:
            raise ValueError(
                f"PairKey is not normalized: {self.user_id_a!r} > {self.user_id_b!r}; use PairKey.of()"
            )

    @classmethod
    def of(cls, first: str, second: str) -> "PairKey":
        a, b = sorted((str(first), str(second)))
        return cls(a, b)

    def other(self, user_id: str) -> str:
        """The counterpart of user_id in this pair."""
        if user_id == self.user_id_a:
            return self.user_id_b
        if user_id == self.user_id_b:
            return self.user_id_a
        raise ValueError(f"User {user_id!r} is not part of pair {self}")

    def as_tuple(self) -> Tuple[str, str]:
        return (self.user_id_a, self.user_id_b)

    def __contains__(self, user_id: str) -> bool:
        return user_id in (self.user_id_a, self.user_id_b)

    def __str__(self) -> str:
        return f"{self.user_id_a}:{self.user_id_b}"
