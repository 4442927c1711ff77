from typing import Any, List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable, Select


class BaseRepository:
    """Session-bound repository. Transaction boundaries belong to the caller (see database.uow)."""

    def __init__(self, db: Session):
        self.db = db

    def _first(self, stmt: Select) -> Optional[Any]:
        return self.db.execute(stmt).scalar_one_or_none()

    def _all(self, stmt: Select) -> List[Any]:
        return list(self.db.execute(stmt).scalars().all())

    def _rowcount(self, stmt: Executable) -> int:
        """Run a bulk UPDATE/DELETE and return the number of matched rows."""
        return self.db.execute(stmt.execution_options(synchronize_session=False)).rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
