"""
Core pipeline -- file selection, per-line comment cleaning, orchestration.

Selects candidate files under a repository root, strips marker-flagged
comments line by line, and writes back only the files that changed.
"""
