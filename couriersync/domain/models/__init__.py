"""Domain models package.

This package contains domain model classes for couriersync.
"""

from .location import Area, City, CourierProvider, LocationRecord, Zone

__all__ = ["Area", "City", "CourierProvider", "LocationRecord", "Zone"]
