from __future__ import annotations

from persons.models.orm import Person
from sqlalchemy import func, select

from .base import BaseRepository


class PersonRepository(BaseRepository[Person]):
    """Encapsulates Person level data operations."""

    model = Person

    def get_by_email(self, email: str) -> Person | None:
        return self.session.scalars(
            select(Person).where(Person.email == email)
        ).one_or_none()

    def list_all(self) -> list[Person]:
        return list(self.session.scalars(select(Person).order_by(Person.id)))

    def list_page(self, *, limit: int, offset: int) -> list[Person]:
        query = select(Person).order_by(Person.id).offset(offset).limit(limit)
        return list(self.session.scalars(query))

    def count(self) -> int:
        return int(self.session.scalar(select(func.count(Person.id))) or 0)
