"""Run the API server: python -m admin_backend"""

import uvicorn

from admin_backend.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "admin_backend.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
    )


if __name__ == "__main__":
    main()
