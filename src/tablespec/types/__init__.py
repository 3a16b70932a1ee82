"""Type definitions for tablespec."""

from .base import TablespecBaseModel
from .statement import RenderedStatement

__all__ = [
    'TablespecBaseModel',
    'RenderedStatement',
]
