"""
general.
=======

Does: Shared, domain-agnostic helpers (config loading, debug tracing).
"""

__all__: list[str] = []
__docformat__ = "google"
