"""
CLI Interface - Command-line tools for hitmerge.

Provides commands for:
- Inspecting ranking formulas
- Merging result files
- Federated search
"""

from .main import app, main

__all__ = ["app", "main"]
