"""Run the API server with uvicorn.

Usage:
    python -m archsim
"""

import uvicorn

from archsim.infrastructure.config import get_settings


def main() -> None:
    api = get_settings().api
    uvicorn.run(
        "archsim.infrastructure.api.main:app",
        host=api.host,
        port=api.port,
        workers=api.workers,
    )


if __name__ == "__main__":
    main()
