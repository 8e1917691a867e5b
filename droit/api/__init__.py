"""API HTTP DROIT (FastAPI)."""
