"""
Shared repository behaviour.

Reads by id go through the cache when the repository has an entity type and
a Cache was passed in; a cache hit yields a detached copy rebuilt from the
stored columns. Writes touch exactly one row and report how many rows they
affected, so a row deleted between lookup and write shows up as 0.

Cache tags are only dropped on write when CACHE_INVALIDATE_ON_WRITE is set;
otherwise cached reads stay valid until their TTL runs out.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Generic, Optional, Set, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..cache import Cache
from ..model.base import utcnow
from ..settings import settings

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RepositoryError(Exception):
    pass


class DuplicateError(RepositoryError):
    """An insert hit a unique or foreign key constraint."""

    def __init__(self, entity_type: str, values: Dict[str, Any]):
        super().__init__(f"{entity_type} conflicts with an existing row: {values}")
        self.entity_type = entity_type
        self.values = values


class BaseRepository(Generic[T]):

    #: Cache namespace; None keeps the entity out of the cache
    entity_type: Optional[str] = None

    def __init__(self, db: Session, model: Type[T], cache: Optional[Cache] = None):
        self.db = db
        self.model = model
        self.cache = cache

    def get_ttl(self) -> int:
        return 600

    def get_entity_tags(self, entity: T) -> Set[str]:
        return set()

    # -- cache plumbing ---------------------------------------------------

    @property
    def _caching(self) -> bool:
        return self.cache is not None and self.entity_type is not None

    def _cache_key(self, entity_id: Any) -> str:
        return self.cache.key(self.entity_type, entity_id)

    def _columns(self, entity: T) -> Dict[str, Any]:
        return {column.name: getattr(entity, column.name, None) for column in entity.__table__.columns}

    def _to_cache(self, entity: T) -> Dict[str, Any]:
        return {
            name: value.isoformat() if isinstance(value, (datetime, date)) else value
            for name, value in self._columns(entity).items()
        }

    def _from_cache(self, data: Dict[str, Any]) -> T:
        entity = self.model()
        for name, value in data.items():
            setattr(entity, name, value)
        return entity

    def _after_write(self, entity: T) -> None:
        if self._caching and settings.CACHE_INVALIDATE_ON_WRITE:
            self.cache.invalidate_tags(f"{self.entity_type}:{entity.id}", *self.get_entity_tags(entity))

    # -- reads --------------------------------------------------------------

    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        if self._caching:
            cached = self.cache.get_by_key(self._cache_key(entity_id))
            if cached is not None:
                return self._from_cache(cached)

        entity = self.db.query(self.model).filter(self.model.id == entity_id).first()

        if entity is not None and self._caching:
            self.cache.set_with_tags(
                self._cache_key(entity_id),
                self._to_cache(entity),
                tags=self.get_entity_tags(entity),
                ttl=self.get_ttl(),
            )
        return entity

    def exists(self, entity_id: Any) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == entity_id).first() is not None

    def find_one_by(self, **criteria) -> Optional[T]:
        return self.db.query(self.model).filter_by(**criteria).first()

    # -- writes -------------------------------------------------------------

    def create(self, entity: T) -> T:
        """
        Raises:
            DuplicateError: On a constraint violation
            RepositoryError: On any other database failure
        """
        try:
            self.db.add(entity)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateError(self.model.__name__, self._columns(entity)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to create {self.model.__name__}: {e}") from e

        self.db.refresh(entity)
        self._after_write(entity)
        return entity

    def update_rows(self, entity: T, updates: Dict[str, Any]) -> int:
        """
        Single UPDATE of the entity's row; `entity` may be a detached copy.
        With nothing to set, no statement is issued and the row is only
        counted.

        Returns:
            Affected row count
        """
        if not updates:
            return self.db.query(self.model).filter(self.model.id == entity.id).count()

        values = dict(updates)
        if hasattr(self.model, "updated_at"):
            values["updated_at"] = utcnow()
        return self._write(entity, lambda query: query.update(values, synchronize_session=False))

    def delete_rows(self, entity: T) -> int:
        return self._write(entity, lambda query: query.delete(synchronize_session=False))

    def _write(self, entity: T, statement) -> int:
        try:
            affected = statement(self.db.query(self.model).filter(self.model.id == entity.id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to write {self.model.__name__} {entity.id}: {e}") from e

        if affected:
            self._after_write(entity)
        return affected
