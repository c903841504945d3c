import logging as module_logging

import seqslice.logging as application_logging

application_logging.configure()
logger = module_logging.getLogger(__name__)

__project__ = "seqslice-api"
__version__ = "2025.1.0"

logger.info(f"seqslice {__version__}")
