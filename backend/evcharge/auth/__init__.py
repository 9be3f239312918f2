"""Bearer token authentication for API routes."""
from evcharge.auth.gateway import Identity, authenticate, get_current_identity

__all__ = ["Identity", "authenticate", "get_current_identity"]
