import uvicorn

from tracker import config


def main():
    config.configure_logging()
    uvicorn.run("tracker.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
