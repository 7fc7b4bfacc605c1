"""
Infrastructure layer (server, persistence, event bus, monitoring).
"""
