"""
sso_companion.api.__main__

Entrypoint for `python -m sso_companion.api` (also installed as `sso-companion`).
"""

from __future__ import annotations

import uvicorn

from sso_companion.api.app import create_app
from sso_companion.settings import get_settings


def main() -> None:
    settings = get_settings()

    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        access_log=False,  # RequestContextMiddleware logs requests with the request id
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
