"""Read-only reference data loaded once at import."""
