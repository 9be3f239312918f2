"""Models package."""
from evcharge.models.user import User
from evcharge.models.station import ChargingStation

__all__ = ["User", "ChargingStation"]
