"""Run the API with uvicorn: ``python -m gestao_colaboradores``."""

import uvicorn

from gestao_colaboradores.config import get_settings
from gestao_colaboradores.main import app


def main() -> None:
    settings = get_settings()
    # uvicorn closes the listener on SIGINT/SIGTERM before the lifespan shutdown runs
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
