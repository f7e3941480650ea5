"""Utility modules for callers of service clients."""
