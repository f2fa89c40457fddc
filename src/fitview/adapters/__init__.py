"""Adapters – integrations with the platform backend."""
