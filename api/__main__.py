import uvicorn

from core.settings import SETTINGS


def main() -> None:
    uvicorn.run(
        "api.main:app",
        host=SETTINGS.APP.HOST,
        port=SETTINGS.APP.PORT,
        log_level=SETTINGS.APP.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
