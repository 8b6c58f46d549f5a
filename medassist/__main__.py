import uvicorn

from medassist.config import HOST, LOG_LEVEL, PORT


def main() -> None:
    """Serve the API with uvicorn (``python -m medassist`` or ``medassist``)."""
    uvicorn.run("medassist.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
