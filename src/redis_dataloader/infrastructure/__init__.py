"""
Infrastructure Module

Adapters for external systems (Redis).
"""
