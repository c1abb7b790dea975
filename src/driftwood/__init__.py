"""
Driftwood package root.

A grid puzzle about crossing a river on floating logs. The rules (terrain,
entity registry, push resolution and animation) live in pure modules; Arcade
specifics stay in ``driftwood.app``.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
