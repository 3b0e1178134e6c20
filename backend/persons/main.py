from __future__ import annotations

import uvicorn
from persons.core.app import create_app
from persons.core.settings import settings

app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    uvicorn.run(
        "persons.main:app",
        host=settings.uvicorn_host,
        port=settings.uvicorn_port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
