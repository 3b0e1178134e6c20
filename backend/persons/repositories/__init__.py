from .person_repository import PersonRepository

__all__ = [
    "PersonRepository",
]
