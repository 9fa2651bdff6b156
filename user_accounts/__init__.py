"""User accounts service: user creation, lookup and paginated listing."""

__version__ = "0.1.0"
