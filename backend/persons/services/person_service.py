from __future__ import annotations

from persons.core.db import SessionFactory, run_in_session
from persons.core.logging import get_logger
from persons.core.settings import settings
from persons.models.orm import MAX_BIGINT_ID, Person
from persons.models.schemas import PersonCreate, PersonSchema, ResultsList
from persons.repositories import PersonRepository
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session


class PersonServiceError(Exception):
    """Base class for business friendly errors surfaced to API consumers."""

    def __init__(
        self, message: str, code: int = 15000, status_code: int = 400
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class PersonNotFoundError(PersonServiceError):
    def __init__(self, person_id: int) -> None:
        super().__init__(f"person {person_id} not found", code=15004, status_code=404)
        self.person_id = person_id


class PersonConflictError(PersonServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code=15009, status_code=409)


def _ensure_positive_limit(limit: int) -> int:
    if limit <= 0:
        return settings.persons_default_page_size
    return min(limit, settings.persons_max_page_size)


class PersonService:
    """Person reads and writes, each in its own session scope."""

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self._session_factory = session_factory
        self.logger = get_logger(__name__)

    def get_person(self, person_id: int) -> PersonSchema:
        if not 1 <= person_id <= MAX_BIGINT_ID:
            raise PersonNotFoundError(person_id)

        def _load(session: Session) -> PersonSchema:
            person = PersonRepository(session).get(person_id)
            if person is None:
                raise PersonNotFoundError(person_id)
            return PersonSchema.model_validate(person)

        return run_in_session(_load, session_factory=self._session_factory)

    def list_persons(self) -> list[PersonSchema]:
        def _load(session: Session) -> list[PersonSchema]:
            return [
                PersonSchema.model_validate(person)
                for person in PersonRepository(session).list_all()
            ]

        return run_in_session(_load, session_factory=self._session_factory)

    def list_results(
        self, *, limit: int = 0, offset: int = 0
    ) -> ResultsList[PersonSchema]:
        page_size = _ensure_positive_limit(limit)
        start = min(max(offset, 0), MAX_BIGINT_ID)

        def _load(session: Session) -> ResultsList[PersonSchema]:
            repo = PersonRepository(session)
            rows = repo.list_page(limit=page_size, offset=start)
            return ResultsList[PersonSchema](
                results=[PersonSchema.model_validate(row) for row in rows],
                total=repo.count(),
                limit=page_size,
                offset=start,
            )

        return run_in_session(_load, session_factory=self._session_factory)

    def create_person(self, payload: PersonCreate) -> PersonSchema:
        def _create(session: Session) -> PersonSchema:
            repo = PersonRepository(session)
            person = repo.add(Person(name=payload.name, email=payload.email))
            repo.refresh(person)
            return PersonSchema.model_validate(person)

        try:
            created = run_in_session(_create, session_factory=self._session_factory)
        except IntegrityError as exc:
            self.logger.info("rejected duplicate person email=%s", payload.email)
            raise PersonConflictError("email already registered") from exc
        self.logger.info("created person id=%s", created.id)
        return created


__all__ = [
    "PersonConflictError",
    "PersonNotFoundError",
    "PersonService",
    "PersonServiceError",
]
