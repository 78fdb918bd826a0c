"""
Interfaces - Entry points into hitmerge.
"""

__all__ = ["cli"]
