from __future__ import annotations

from typing import Any, Mapping

import httpx
from fastapi import FastAPI
from persons.client.exceptions import RecordNotFoundError
from persons.client.paths import PersonPaths
from persons.core.logging import get_logger
from persons.core.settings import settings
from persons.models.schemas import PersonCreate, PersonSchema, ResultsList
from persons.utils.http_client import build_async_client
from persons.utils.responses import unwrap_data


class Endpoint:
    """Typed access to one remote resource root over a shared async client."""

    def __init__(self, root: str, client: httpx.AsyncClient) -> None:
        self._root = "/" + root.strip("/")
        self._client = client
        self._logger = get_logger(__name__)

    async def __aenter__(self) -> "Endpoint":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _path(self, path: str | None = None) -> str:
        if not path:
            return self._root
        return path if path.startswith("/") else f"{self._root}/{path}"

    async def _get(
        self,
        path: str | None = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        response = await self._client.get(self._path(path), params=params or None)
        return self._unwrap(response)

    async def _post(self, path: str | None = None, *, json_body: Any = None) -> Any:
        response = await self._client.post(self._path(path), json=json_body)
        return self._unwrap(response)

    def _unwrap(self, response: httpx.Response) -> Any:
        self._logger.debug(
            "%s %s -> %s",
            response.request.method,
            response.request.url.path,
            response.status_code,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            raise RecordNotFoundError.from_response(response)
        response.raise_for_status()
        return unwrap_data(response.json())


class PersonEndpoint(Endpoint):
    """Remote person resource: fetch one, fetch all, fetch a page, create."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        super().__init__(PersonPaths.ROOT, client)

    @classmethod
    def from_settings(cls, *, app: FastAPI | None = None) -> "PersonEndpoint":
        client = build_async_client(
            settings.person_api_base_url,
            app=app,
            timeout_s=settings.person_api_timeout_s,
        )
        return cls(client)

    async def get_by_id(self, person_id: int) -> PersonSchema:
        data = await self._get(PersonPaths.get_by_id_path(person_id))
        return PersonSchema.model_validate(data)

    async def get_all(self) -> list[PersonSchema]:
        data = await self._get()
        return [PersonSchema.model_validate(item) for item in data or []]

    async def get_all_results_list(
        self, *, limit: int | None = None, offset: int | None = None
    ) -> ResultsList[PersonSchema]:
        """Fetch one page; omitted bounds fall back to the server defaults."""

        params = {
            key: value
            for key, value in (("limit", limit), ("offset", offset))
            if value is not None
        }
        data = await self._get(PersonPaths.RESULTS_LIST_PATH, params=params)
        return ResultsList[PersonSchema].model_validate(data)

    async def create(self, person: PersonCreate) -> int:
        data = await self._post(json_body=person.model_dump(mode="json"))
        return int(data["person_id"])
