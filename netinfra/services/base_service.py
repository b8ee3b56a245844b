# netinfra/services/base_service.py
"""
BaseCRUDService: generic create/read/update/delete over one SQLModel table.
"""
from typing import Any, Dict, Generic, List, Type, TypeVar

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..utils.timeutils import utcnow

ModelType = TypeVar("ModelType")


class BaseCRUDService(Generic[ModelType]):
    """
    Usage:
        class WanMonitorService(BaseCRUDService[WanMonitor]):
            def __init__(self, session: Session):
                super().__init__(session, WanMonitor)
    """

    def __init__(self, session: Session, model: Type[ModelType]):
        self.session = session
        self.model = model

    def get_all(self) -> List[ModelType]:
        return self.session.exec(select(self.model)).all()

    def get_by_id(self, id: int) -> ModelType:
        """Raises HTTPException 404 when the row does not exist."""
        record = self.session.get(self.model, id)
        if not record:
            raise HTTPException(status_code=404, detail=f"{self.model.__name__} not found")
        return record

    def create(self, data: Dict[str, Any]) -> ModelType:
        """Raises ValueError (after rolling back) when the insert is rejected."""
        record = self.model(**data)
        return self._save(record, "creating")

    def update(self, id: int, data: Dict[str, Any]) -> ModelType:
        record = self.get_by_id(id)
        for key, value in data.items():
            setattr(record, key, value)
        if hasattr(record, "updated_at"):
            record.updated_at = utcnow()
        return self._save(record, "updating")

    def delete(self, id: int) -> None:
        record = self.get_by_id(id)
        self.session.delete(record)
        self.session.commit()

    def _save(self, record: ModelType, action: str) -> ModelType:
        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
            return record
        except SQLAlchemyError as e:
            self.session.rollback()
            raise ValueError(f"Error {action} {self.model.__name__}: {e}") from e
