"""Run the API with uvicorn: python -m storeapi"""

import uvicorn

from storeapi.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("storeapi.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    main()
