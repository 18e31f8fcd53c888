"""Shared test helpers (fake remote service, payload builders)."""
