"""Integrations with third-party HTTP services."""
