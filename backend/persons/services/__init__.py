from .person_service import (
    PersonConflictError,
    PersonNotFoundError,
    PersonService,
    PersonServiceError,
)

__all__ = [
    "PersonConflictError",
    "PersonNotFoundError",
    "PersonService",
    "PersonServiceError",
]
