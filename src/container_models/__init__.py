"""
Immutable data container models propagated through brick pipes.

Every transformation creates a new :class:`Content`; a value is never mutated
after construction, so bricks can cache and compare it freely.
"""

from .content import Content


__all__ = ["Content"]
