"""Library for the data types used to describe a pattern search."""

from .component import Component, Direction
from .pattern import Pattern

__all__ = [
    "Component",
    "Direction",
    "Pattern",
]
