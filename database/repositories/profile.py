import logging
from typing import List, Optional, Any
from sqlalchemy import select

from database.models import UserProfile
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    def get_by_user_id(self, user_id: str) -> Optional[UserProfile]:
        stmt = select(UserProfile).where(UserProfile.user_id == user_id)
        return self._first(stmt)

    def list_except(self, user_id: str) -> List[UserProfile]:
        stmt = select(UserProfile).where(
            UserProfile.user_id != user_id
        ).order_by(UserProfile.user_id)
        return self._all(stmt)

    def list_all(self) -> List[UserProfile]:
        stmt = select(UserProfile).order_by(UserProfile.user_id)
        return self._all(stmt)

    def save_profile(
        self,
        user_id: str,
        courses: Optional[List[str]] = None,
        interests: Optional[List[str]] = None,
        **attributes: Any
    ) -> UserProfile:
        """Create or update the profile for user_id.

        Only keyword attributes that exist on UserProfile are applied.
        """
        profile = self.get_by_user_id(user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id)
            self.db.add(profile)

        if courses is not None:
            profile.courses = list(courses)
        if interests is not None:
            profile.interests = list(interests)

        for name, value in attributes.items():
            if name in ('major', 'year', 'learning_style', 'study_preference'):
                setattr(profile, name, value)
            else:
                logger.warning(f"Ignoring unknown profile attribute '{name}' for user {user_id}")

        self.db.flush()
        return profile
