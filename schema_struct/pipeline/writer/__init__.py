"""
Output writing for generated code.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter

__all__ = ["AtomicWriter"]
