"""Dependency injection."""

from jagoan_bridge.di.container import Container

__all__ = ["Container"]
