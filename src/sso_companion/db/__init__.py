"""
sso_companion.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and the bundled user/config stores.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Hosts with their own user store plug in through `identity.models.UserStore`
# and never need this package's user table.
