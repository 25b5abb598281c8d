"""
sso_companion.identity

Identity mapping package.

Responsibilities:
- Remote identity assertion model and the local user-store protocol.
- Policy layer mapping a verified remote identity to a local account.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs network I/O; it is tested with fake stores.
