"""
Dependency injection.
"""

from boutique.di.container import Container

__all__ = ["Container"]
