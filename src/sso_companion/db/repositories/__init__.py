"""
sso_companion.db.repositories

Repository package.

Responsibilities:
- SQLAlchemy implementations of the user store and configuration persistence.
"""

# Package marker; repositories are imported directly from submodules.
