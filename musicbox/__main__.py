"""
Run the API server:

  python -m musicbox

Host and port come from HOST / PORT (default 0.0.0.0:8080).
"""

import sys

import uvicorn

from musicbox.core.config import get_settings


def main() -> int:
    settings = get_settings()
    uvicorn.run(
        "musicbox.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
