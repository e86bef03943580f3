"""
Integration tests.

These run against a real Redis and are skipped unless USE_REAL_REDIS=1.
"""
