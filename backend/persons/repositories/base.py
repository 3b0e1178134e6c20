from __future__ import annotations

from typing import Generic, TypeVar

from persons.models import Base
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Lightweight repository wrapper used by domain services."""

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, entity_id: int) -> ModelT | None:
        return self.session.get(self.model, entity_id)

    def add(self, instance: ModelT) -> ModelT:
        self.session.add(instance)
        self.session.flush()
        return instance

    def refresh(self, instance: ModelT) -> ModelT:
        self.session.refresh(instance)
        return instance
