"""Ingestion layer.

This package turns raw advertisements into readings (decoder) and carries
advertisement events from scan sources into the registry (feed).
"""

__all__: list[str] = []
