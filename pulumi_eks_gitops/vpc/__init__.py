"""VPC components."""

from .core import PublicVPC
from .utils import validate_subnet_layout

__all__ = [
    "PublicVPC",
    "validate_subnet_layout",
]
