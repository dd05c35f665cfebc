"""
Base repository implementing common read/insert operations using SQLAlchemy 2.0.

This module provides a generic repository pattern that can be extended
by specific model repositories. Swipes and matches are append-only, so there
are no update or delete operations.
"""

from __future__ import annotations
from typing import Generic, TypeVar, Type, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from app.core.exceptions import ConstraintViolation

logger = logging.getLogger(__name__)

# Generic type variable for the model
T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository for read and insert operations.

    Type Parameters:
        T: The SQLAlchemy model type this repository manages

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self):
                super().__init__(User)
    """

    def __init__(self, model: Type[T]):
        """
        Initialize the repository with a model class.

        Args:
            model: The SQLAlchemy model class to manage
        """
        self.model = model

    async def get(
        self,
        db: AsyncSession,
        id: int
    ) -> Optional[T]:
        """
        Retrieve a single record by ID.

        Args:
            db: Active database session
            id: Primary key of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        try:
            stmt = select(self.model).where(self.model.id == id)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {self.model.__name__} by id {id}: {e}")
            raise

    async def exists(
        self,
        db: AsyncSession,
        id: int
    ) -> bool:
        """
        Check if a record exists by ID.

        Args:
            db: Active database session
            id: Primary key to check

        Returns:
            True if exists, False otherwise
        """
        try:
            stmt = select(func.count()).select_from(self.model).where(self.model.id == id)
            result = await db.execute(stmt)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model.__name__} with id {id}: {e}")
            raise

    async def create(
        self,
        db: AsyncSession,
        obj_in: dict,
        *,
        constraint: str = "unique",
        savepoint: bool = False
    ) -> T:
        """
        Insert a new record and flush it so the database enforces constraints.

        With ``savepoint=True`` the insert runs inside a SAVEPOINT; a
        constraint failure then rolls back only this insert and leaves the
        rest of the session's transaction intact. Without it, a failure rolls
        back the whole transaction.

        Args:
            db: Active database session
            obj_in: Dictionary of field values for the new record
            constraint: Name of the constraint reported on violation
            savepoint: Isolate the insert in a nested transaction

        Returns:
            Created model instance

        Raises:
            ConstraintViolation: If the database rejects the row on a constraint

        Example:
            swipe = await repo.create(db, {"swiper_id": 1, "target_id": 2, "liked": True})
            await db.commit()
        """
        try:
            db_obj = self.model(**obj_in)
            if savepoint:
                async with db.begin_nested():
                    db.add(db_obj)
                    await db.flush()
            else:
                db.add(db_obj)
                await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            logger.warning(f"Integrity error creating {self.model.__name__}: {e.orig}")
            if not savepoint:
                await db.rollback()
            raise ConstraintViolation(constraint, detail=self.model.__name__) from e
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}")
            if not savepoint:
                await db.rollback()
            raise
