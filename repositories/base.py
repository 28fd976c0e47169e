"""Base repository with common database operations."""
from typing import Generic, TypeVar, Type, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import StorageFailureError
from logging_config import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing common CRUD operations.

    Database errors never leak out as SQLAlchemy exceptions: every failure
    is logged and re-raised as StorageFailureError.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None if not found
        """
        try:
            return self.db.query(self.model).filter(
                self.model.id == id
            ).first()
        except SQLAlchemyError as e:
            logger.error("Failed to get entity by id", model=self.model.__name__, id=id, error=str(e))
            raise StorageFailureError(f"Failed to get {self.model.__name__}") from e

    def create(self, **kwargs) -> ModelType:
        """
        Create new entity.

        Args:
            **kwargs: Entity attributes

        Returns:
            Created entity
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)

            logger.info("Created entity", model=self.model.__name__, id=entity.id)
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to create entity", model=self.model.__name__, error=str(e))
            raise StorageFailureError(f"Failed to create {self.model.__name__}") from e
