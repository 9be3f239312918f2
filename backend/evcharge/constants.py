"""Application-wide constants."""

# Station status values
class StationStatus:
    """Station status constants."""
    AVAILABLE = "available"
    IN_USE = "in_use"
    MAINTENANCE = "maintenance"
    OFFLINE = "offline"

    ALL = (AVAILABLE, IN_USE, MAINTENANCE, OFFLINE)


class ConnectorType:
    """Connector type constants."""
    TYPE_1 = "Type 1"
    TYPE_2 = "Type 2"
    CCS = "CCS"
    CHADEMO = "CHAdeMO"
    TESLA = "Tesla"

    ALL = (TYPE_1, TYPE_2, CCS, CHADEMO, TESLA)


LOCATION_TYPE_POINT = "Point"

# Field limits
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 200
POWER_OUTPUT_MIN_KW = 0
POWER_OUTPUT_MAX_KW = 1000
LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-90.0, 90.0)

# Credentials
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt ignores/rejects anything longer
EMAIL_MAX_LENGTH = 254
