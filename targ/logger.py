# Targ Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Package-wide logger for targ."""
import logging

logger: logging.Logger = logging.getLogger("targ")
