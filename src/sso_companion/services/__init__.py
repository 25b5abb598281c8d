"""
sso_companion.services

Service-layer package.

Responsibilities:
- Compose the companion client, identity mapper and user store into host-facing operations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake clients/stores.
