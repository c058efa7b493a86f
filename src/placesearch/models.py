from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping

# wire key -> attribute
WIRE_FIELDS = {
    "name": "name",
    "isoCode": "iso_code",
    "belfioreCode": "regional_code",
    "cityId": "id",
    "district": "district",
    "region": "region",
}


@dataclass(frozen=True)
class Place:
    name: str
    iso_code: str
    regional_code: str        # Belfiore cadastral code, e.g. "H501"
    id: int
    district: str
    region: str

    @classmethod
    def from_wire(cls, row: Mapping[str, Any]) -> "Place":
        """
        Build a Place from its wire shape
        {name, isoCode, belfioreCode, cityId, district, region}.
        Raises ValueError when a key is missing or cityId is not an integer.
        """
        missing = [k for k in WIRE_FIELDS if k not in row or row[k] is None]
        if missing:
            raise ValueError(f"place record is missing {', '.join(missing)}")
        raw_id = row["cityId"]
        if isinstance(raw_id, bool):
            raise ValueError(f"cityId must be an integer, got {raw_id!r}")
        try:
            pid = int(raw_id)
        except (TypeError, ValueError):
            raise ValueError(f"cityId must be an integer, got {raw_id!r}") from None
        if isinstance(raw_id, float) and raw_id != pid:
            raise ValueError(f"cityId must be an integer, got {raw_id!r}")
        return cls(
            name=str(row["name"]),
            iso_code=str(row["isoCode"]),
            regional_code=str(row["belfioreCode"]),
            id=pid,
            district=str(row["district"]),
            region=str(row["region"]),
        )

    def to_wire(self) -> dict[str, Any]:
        return {wire: getattr(self, attr) for wire, attr in WIRE_FIELDS.items()}
