"""Configuration loading for termtree.

Main components:
- ConfigLoader (termtree.config.loader): Load and merge user, project and
  environment settings
- flatten_pydantic_errors: Turn pydantic errors into readable messages
- Default values for terms and builders
"""

from termtree.config.defaults import (
    DEFAULT_DATA_TYPE,
    DEFAULT_NAMESPACE_PREFIX,
    DEFAULT_TERM_SETTINGS,
)
from termtree.config.validator import flatten_pydantic_errors

__all__ = [
    "DEFAULT_DATA_TYPE",
    "DEFAULT_NAMESPACE_PREFIX",
    "DEFAULT_TERM_SETTINGS",
    "flatten_pydantic_errors",
]
