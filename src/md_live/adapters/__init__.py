"""Boundary adapters: rendering, storage, and UI hosts."""
