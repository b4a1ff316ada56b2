"""
WebPrint entrypoint - serves the render API with uvicorn.
"""

import uvicorn

from webprint.app import build_app
from webprint.config import get_settings
from webprint.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Configure logging and serve the WebPrint API until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level)
    app = build_app(settings)

    base_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"WebPrint listening on {base_url} (API docs at {base_url}/docs)")

    # log_config=None keeps uvicorn from replacing the handlers set up above
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
