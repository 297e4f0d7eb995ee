"""Serverless URL shortener backed by a TTL-enabled key-value store."""

__version__ = '1.0.0'
