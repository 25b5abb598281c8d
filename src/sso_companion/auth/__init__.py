"""
sso_companion.auth

Authorization for this service's own privileged endpoints.

Responsibilities:
- Validate host-issued bearer JWTs into an `AdminPrincipal`.
- FastAPI dependency gating the configuration and connectivity endpoints.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Unrelated to SSO token validation: SSO tokens are opaque and only the companion
# app can confirm them (see `companion_clients`).
