"""
Markstrip -- strip marker-flagged comments from a git working tree.

Markstrip walks the repository, honours .gitignore, selects files by glob,
and removes any comment carrying the marker token before you commit.
"""

__version__ = "1.0.0"
__author__ = "Markstrip Team"
