"""
Shared testing utilities.

Provides standardized test structure:
- LaborantTest: Base class for component tests (pytest-collected)
"""

from shared.tests.test_base import LaborantTest

__all__ = ["LaborantTest"]
