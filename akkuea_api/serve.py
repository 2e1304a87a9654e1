"""Run the API with uvicorn.

Usage:
    python -m akkuea_api.serve
"""
import logging

import uvicorn

from akkuea_api.core.config import load_settings
from akkuea_api.core.request_logging import configure_logging
from akkuea_api.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info('Starting server on port %s', settings.port)
    uvicorn.run(app, host='0.0.0.0', port=settings.port, log_config=None)


if __name__ == '__main__':
    main()
