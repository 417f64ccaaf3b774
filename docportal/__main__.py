import uvicorn

from docportal.core.config import settings
from docportal.core.logging import configure_logging
from docportal.main import create_app


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
