"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from devconnector.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id(1)

    Repositories only flush; committing is left to the owner of the session.
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def create(self, **kwargs) -> T:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, id: int) -> bool:
        """Delete a record by ID."""
        instance = self.get_by_id(id)
        if instance:
            self.session.delete(instance)
            self.session.flush()
            return True
        return False

    def exists_where(self, **filters) -> bool:
        """Check if any record exists matching filters."""
        query = self.session.query(self.model)
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        result = self.session.query(query.exists()).scalar()
        return bool(result) if result is not None else False

    def _column(self, key: str):
        # A typo in a filter key must not silently widen the query
        if not hasattr(self.model, key):
            raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
        return getattr(self.model, key)
