"""Uvicorn server runner."""

import structlog
import uvicorn

from sessionvault.app import App
from sessionvault.config import Config
from sessionvault.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def run_server(app: App, config: Config) -> None:
    """Serve the API with uvicorn.

    ``log_config=None`` leaves uvicorn's loggers on the root handler set up by
    ``setup_logging``, so server and access lines share the structlog output.
    """
    fastapi_app = create_fastapi_app(app, config)
    logger.info("server_starting", host=config.host, port=config.port, debug=config.debug)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=None,
        access_log=config.debug,
        proxy_headers=True,
        forwarded_allow_ips=config.forwarded_allow_ips,
    )
