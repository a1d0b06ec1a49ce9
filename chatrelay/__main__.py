import uvicorn

from chatrelay.core import config


def main() -> None:
    uvicorn.run(
        "chatrelay.main:create_app",
        factory=True,
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
