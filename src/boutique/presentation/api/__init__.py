"""
HTTP API: dependencies, middleware and routes.
"""
