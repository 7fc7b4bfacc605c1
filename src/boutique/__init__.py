"""
Casual Chic Boutique backend.

Boots the HTTP listener, coordinates graceful shutdown and serves the
custom Outfit feature on top of the commerce framework.
"""

__version__ = "2.0.0"
