from persons.core.db import check_db_health
from persons.utils.responses import success_response
from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def read_healthz() -> dict:
    """Liveness check that also reports database reachability."""

    db_status = await check_db_health()
    return success_response({"status": "ok", "db": db_status})
