"""Configuration package.

Provides the layered ``ProcessConfig`` plus the default instance and its module-level functions.
"""
from .process_config import ProcessConfig  # noqa: F401
from .default import default_config, reset_default_config  # noqa: F401
