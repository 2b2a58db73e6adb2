"""Report Concourse build results to Stash (Bitbucket Server)."""

__version__ = "0.1.0"

# Imported first so module-level loggers are contextual
from . import logging_config  # noqa: F401, E402
from .cli import main  # noqa: E402

__all__ = ["main", "__version__"]
