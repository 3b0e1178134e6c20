from __future__ import annotations

import pytest
from persons.core.settings import settings
from persons.models.schemas import PersonCreate
from persons.services import (
    PersonConflictError,
    PersonNotFoundError,
    PersonService,
)


@pytest.fixture()
def service(isolated_session_factory) -> PersonService:
    return PersonService(session_factory=isolated_session_factory)


def test_list_on_empty_store_returns_empty_list(service):
    assert service.list_persons() == []
    page = service.list_results()
    assert page.results == []
    assert page.total == 0


def test_create_then_get_round_trip(service):
    created = service.create_person(PersonCreate(name="Ada", email="Ada@Example.com"))

    fetched = service.get_person(created.id)
    assert fetched.id == created.id
    assert fetched.name == "Ada"
    assert fetched.email == "ada@example.com"
    assert fetched.created_at is not None


def test_get_missing_person_raises_not_found(service):
    with pytest.raises(PersonNotFoundError) as excinfo:
        service.get_person(987654)

    assert excinfo.value.code == 15004
    assert excinfo.value.status_code == 404


def test_duplicate_email_is_rejected_and_not_persisted(service):
    service.create_person(PersonCreate(name="Grace", email="grace@example.com"))

    with pytest.raises(PersonConflictError) as excinfo:
        service.create_person(PersonCreate(name="Impostor", email="grace@example.com"))

    assert excinfo.value.status_code == 409
    names = [person.name for person in service.list_persons()]
    assert names == ["Grace"]


def test_list_results_pages_in_id_order(service):
    ids = [
        service.create_person(PersonCreate(name=f"Person {idx}")).id
        for idx in range(5)
    ]

    first = service.list_results(limit=2, offset=0)
    second = service.list_results(limit=2, offset=2)

    assert [person.id for person in first.results] == ids[:2]
    assert [person.id for person in second.results] == ids[2:4]
    assert first.total == second.total == 5
    assert second.limit == 2
    assert second.offset == 2


def test_list_results_normalizes_limit(service):
    assert service.list_results(limit=0).limit == settings.persons_default_page_size
    assert (
        service.list_results(limit=10_000).limit == settings.persons_max_page_size
    )
    assert service.list_results(offset=-5).offset == 0


@pytest.mark.parametrize("person_id", [0, -1, 2**63, 2**70])
def test_ids_outside_key_range_are_not_found(service, person_id):
    with pytest.raises(PersonNotFoundError) as excinfo:
        service.get_person(person_id)

    assert excinfo.value.person_id == person_id


def test_list_results_defaults_to_configured_page_size(service):
    page = service.list_results()
    assert page.limit == settings.persons_default_page_size
    assert page.offset == 0


def test_list_results_caps_huge_offset(service):
    service.create_person(PersonCreate(name="Only"))

    page = service.list_results(offset=2**70)
    assert page.results == []
    assert page.total == 1
