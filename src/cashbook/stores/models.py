#!/usr/bin/env python3
"""Store model."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_STORE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def validate_store_id(store_id: str) -> str:
    """
    Check that a store id is usable as a partition and snapshot directory name.

    Ids are letters, digits, "-" and "_", starting with a letter or digit.

    Raises:
        ValueError: If the id is empty or contains anything else
    """
    store_id = store_id.strip()
    if not _STORE_ID_PATTERN.match(store_id):
        raise ValueError(f"Invalid store id (letters, digits, - and _ only): {store_id!r}")
    return store_id


@dataclass
class Store:
    """
    A retail outlet. Every employee, advance, salary and sales record
    belongs to exactly one store partition, identified by Store.id.
    """

    id: str
    name: str
    address: str = ""
    phone: str | None = None
    email: str | None = None
    is_active: bool = True
    created_at: str = field(default_factory=_now_iso)

    @property
    def key(self) -> str:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "is_active": self.is_active,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Store":
        return cls(
            id=data["id"],
            name=data["name"],
            address=data.get("address") or "",
            phone=data.get("phone") or None,
            email=data.get("email") or None,
            is_active=bool(data.get("is_active", True)),
            created_at=data.get("created_at") or _now_iso(),
        )
