"""
Domain layer for Boutique.
"""
