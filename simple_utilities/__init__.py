"""
simple-utilities - small, dependable building blocks for Python applications

This package provides:
- A rule-string validator for nested data (`required|string|min:3`, `users.*.email`)
- Array helpers and a fluent Collection
- Typed data transfer objects
- A local file cache and file storage
- A timezone-aware datetime with human readable differences
- An in-process event dispatcher
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
from .app_provider import boot  # noqa: F401
