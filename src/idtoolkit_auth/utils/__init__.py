"""Identity toolkit utilities."""

from . import validators

__all__ = [
    "validators",
]
