"""
Shared utilities for the Casual Chic Boutique backend.
"""
