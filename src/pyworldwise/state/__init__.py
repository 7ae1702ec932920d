"""State/store layer.

This package is the single source of truth for the in-memory city
collection: the action variants, the pure transition function, and the
per-session store that applies it.
"""
