"""Blueprint exports."""

from . import api, site

__all__ = [
    "api",
    "site",
]
