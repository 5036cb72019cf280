"""Ingestion layer.

This package contains the adapters that turn decoded server payloads
(envelopes of loosely-typed records) into normalized domain objects.
"""

__all__: list[str] = []
