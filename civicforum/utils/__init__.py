"""Utility functions and helpers."""

from civicforum.utils.pagination import paginate, PaginationResult

__all__ = ["paginate", "PaginationResult"]
