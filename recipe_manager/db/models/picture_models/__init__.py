"""Picture Models package initializer."""

from .picture import Picture

__all__ = [
    "Picture",
]
