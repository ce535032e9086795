"""Asyncio HTTP client building blocks: streams with delayed TLS, DNS ordering, protocol selection, a client and mocks."""

__version__ = "0.1.0"