"""Recipe Manager service package.

Importing the package configures loguru and routes standard-library logging
(uvicorn, SQLAlchemy, slowapi) through it.
"""

import logging

from recipe_manager.core.logging import configure_logging
from recipe_manager.middleware.logging_middleware import InterceptHandler

configure_logging()

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
for name in logging.root.manager.loggerDict:
    logging.getLogger(name).handlers = [InterceptHandler()]
    logging.getLogger(name).propagate = False
