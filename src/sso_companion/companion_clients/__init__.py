"""
sso_companion.companion_clients

Companion-app client package.

Responsibilities:
- Provide the client boundary for calling the external identity-assertion service.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The verification service depends on this boundary (not on httpx directly).
