"""
HTTP API package.

Routers for chat and health plus dependency providers.
"""
