"""Shared helpers (CRS handling)."""
