"""Kernel types – small framework-agnostic helpers."""
from mp_tables.kernel.types.precedence import first_matching, first_present

__all__ = ["first_matching", "first_present"]
