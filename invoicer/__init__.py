"""Local-first invoice generator."""
