"""
sso_companion.api.routers

HTTP routers: host-facing SSO endpoints and this service's own health probes.
"""
