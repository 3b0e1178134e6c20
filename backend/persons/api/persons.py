from __future__ import annotations

from persons.client.paths import PersonPaths
from persons.core.settings import settings
from persons.models.orm import MAX_BIGINT_ID
from persons.models.schemas import PersonCreate
from persons.services.person_service import PersonService, PersonServiceError
from persons.utils.responses import error_response, success_response
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

router = APIRouter(prefix=PersonPaths.ROOT, tags=["persons"])


def _service() -> PersonService:
    return PersonService()


def _handle_service_error(exc: PersonServiceError) -> JSONResponse:
    payload = error_response(exc.message, code=exc.code)
    return JSONResponse(status_code=exc.status_code, content=payload)


@router.get(
    "",
    summary="List persons",
    description="Return every person record ordered by id.",
)
def list_persons() -> dict:
    service = _service()
    data = [person.model_dump(mode="json") for person in service.list_persons()]
    return success_response(data)


@router.get(
    f"/{PersonPaths.RESULTS_LIST}",
    summary="Paginated persons",
    description="Return one page of person records with pagination metadata.",
)
def list_person_results(
    limit: int = Query(
        default=settings.persons_default_page_size,
        ge=1,
        le=settings.persons_max_page_size,
        description="Page size",
    ),
    offset: int = Query(
        default=0, ge=0, le=MAX_BIGINT_ID, description="Number of records to skip"
    ),
) -> dict:
    service = _service()
    page = service.list_results(limit=limit, offset=offset)
    return success_response(page.model_dump(mode="json"))


@router.get(
    "/{person_id}",
    summary="Person detail",
    description="Return a single person record by id.",
)
def get_person(person_id: int) -> dict:
    service = _service()
    try:
        person = service.get_person(person_id)
    except PersonServiceError as exc:
        return _handle_service_error(exc)
    return success_response(person.model_dump(mode="json"))


@router.post(
    "",
    summary="Create person",
    description="Persist a new person record and return its assigned id.",
)
def create_person(payload: PersonCreate) -> dict:
    service = _service()
    try:
        person = service.create_person(payload)
    except PersonServiceError as exc:
        return _handle_service_error(exc)
    return success_response(
        {"person_id": person.id, "person": person.model_dump(mode="json")}
    )
