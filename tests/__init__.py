"""Unit tests for the translation client.

Tests use pytest with asyncio support. HTTP traffic is replaced by in-memory transports
or a dummy aiohttp session via monkeypatch.
"""
