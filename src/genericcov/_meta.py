from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("genericcov")

logger = logging.getLogger("genericcov")

__all__ = ["__version__", "logger"]
