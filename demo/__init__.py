"""
Demo Package.

Example components wired by app.py: a config provider, an HTTP
route table and an HTTP server that depends on both.
"""

from .components import AppRoutes, ConfigComponent, ConfigMock, HttpServer

__all__ = [
    "AppRoutes",
    "ConfigComponent",
    "ConfigMock",
    "HttpServer",
]
