"""State/store layer.

This package is the single source of truth for how received advertisements
are merged into the per-device registry.
"""
