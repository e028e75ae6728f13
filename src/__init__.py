"""root package for project modules."""

from __future__ import annotations

__version__ = "0.1.0"
