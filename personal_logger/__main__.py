"""Run the service: python -m personal_logger"""

import uvicorn

from personal_logger.config import settings


def main() -> None:
    uvicorn.run(
        "personal_logger.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
