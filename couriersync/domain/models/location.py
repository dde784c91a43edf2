"""Location catalog domain models.

A courier provider exposes its coverage as a three level hierarchy: cities
contain zones and zones contain areas. The sync pipeline flattens that
hierarchy into :class:`LocationRecord` rows, one per (provider, city, zone,
area) tuple.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class CourierProvider(str, Enum):
    """Closed set of courier providers known to the catalog."""

    PATHAO = "Pathao"
    REDX = "Redx"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def from_name(cls, name: str) -> "CourierProvider":
        """Case-insensitive lookup by member name or display value."""
        normalized = (name or "").strip().lower()
        for member in cls:
            if normalized in (member.name.lower(), member.value.lower()):
                return member
        raise ValueError(f"Unknown courier provider: {name!r}")


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass(frozen=True)
class City:
    city_id: int
    city_name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "City | None":
        city_id = _to_int(payload.get("city_id"))
        if city_id is None:
            return None
        return cls(city_id=city_id, city_name=str(payload.get("city_name") or ""))


@dataclass(frozen=True)
class Zone:
    zone_id: int
    zone_name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Zone | None":
        zone_id = _to_int(payload.get("zone_id"))
        if zone_id is None:
            return None
        return cls(zone_id=zone_id, zone_name=str(payload.get("zone_name") or ""))


@dataclass(frozen=True)
class Area:
    """A deliverable area inside a zone.

    Availability flags default to ``False`` when the provider omits them.
    """

    area_id: int | None
    area_name: str | None = None
    home_delivery_available: bool = False
    pickup_available: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Area":
        name = payload.get("area_name")
        return cls(
            area_id=_to_int(payload.get("area_id")),
            area_name=str(name) if name is not None else None,
            home_delivery_available=_to_bool(
                payload.get("home_delivery_available", False)
            ),
            pickup_available=_to_bool(payload.get("pickup_available", False)),
        )


LocationKey = tuple[str, int, int, int | None]


@dataclass
class LocationRecord:
    """Domain model for one persisted catalog row.

    The tuple ``(provider_name, city_id, zone_id, area_id)`` is the natural key
    used for upserts. Names and availability flags change on re-sync; the key
    fields never do.
    """

    provider_name: str
    city_id: int
    city_name: str
    zone_id: int
    zone_name: str
    area_id: int | None = None
    area_name: str | None = None
    home_delivery_available: bool = False
    pickup_available: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def key(self) -> LocationKey:
        return (self.provider_name, self.city_id, self.zone_id, self.area_id)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @classmethod
    def build(
        cls, provider: CourierProvider, city: City, zone: Zone, area: Area
    ) -> "LocationRecord":
        """Flatten one branch of the provider hierarchy into a record."""
        return cls(
            provider_name=provider.value,
            city_id=city.city_id,
            city_name=city.city_name,
            zone_id=zone.zone_id,
            zone_name=zone.zone_name,
            area_id=area.area_id,
            area_name=area.area_name,
            home_delivery_available=area.home_delivery_available,
            pickup_available=area.pickup_available,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LocationRecord":
        """Create a LocationRecord from a database row."""

        def parse_datetime(value: object) -> datetime | None:
            if value is None:
                return None
            if isinstance(value, datetime):
                return value
            if isinstance(value, str):
                try:
                    return datetime.fromisoformat(value.replace("Z", "+00:00"))
                except ValueError:
                    return None
            return None

        return cls(
            provider_name=str(data.get("provider_name", "")),
            city_id=int(data["city_id"]),
            city_name=str(data.get("city_name") or ""),
            zone_id=int(data["zone_id"]),
            zone_name=str(data.get("zone_name") or ""),
            area_id=_to_int(data.get("area_id")),
            area_name=data.get("area_name"),
            home_delivery_available=bool(data.get("home_delivery_available")),
            pickup_available=bool(data.get("pickup_available")),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            deleted_at=parse_datetime(data.get("deleted_at")),
        )


__all__ = ["Area", "City", "CourierProvider", "LocationKey", "LocationRecord", "Zone"]
