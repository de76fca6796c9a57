"""
Process entry point: ``python -m todo_api``.

Serves the application with uvicorn on the configured host and port.
"""

import uvicorn

from todo_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
