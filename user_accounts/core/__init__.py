# Core package initialization
# Configuration, errors, logging and password hashing shared by all layers.

from . import config, exceptions

__all__ = [
    "config",
    "exceptions",
]
