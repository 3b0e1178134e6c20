from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = PROJECT_ROOT / "backend"
for candidate in (PROJECT_ROOT, BACKEND_DIR):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from persons.core.db import run_in_session
from persons.models.orm import Person
from persons.repositories import PersonRepository
from sqlalchemy.orm import Session

DEMO_PERSONS = (
    ("Ada Lovelace", "ada@example.com"),
    ("Grace Hopper", "grace@example.com"),
    ("Alan Turing", "alan@example.com"),
)


def seed_persons(session: Session) -> int:
    repo = PersonRepository(session)
    created = 0
    for name, email in DEMO_PERSONS:
        if repo.get_by_email(email) is None:
            repo.add(Person(name=name, email=email))
            created += 1
    return created


if __name__ == "__main__":
    count = run_in_session(seed_persons, label="seed_persons")
    print(f"Demo persons ready ({count} created).")
