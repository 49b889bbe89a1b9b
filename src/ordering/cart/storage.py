"""Durable cart storage: one serialized cart per identity key.

The payload is versioned::

    {"schema_version": 1, "lines": [{"product_id": ..., "name": ..., "unit_price": "12.50", "quantity": 2}]}

A bare JSON array is the storefront's earlier unversioned format (product
dicts with ``id``/``name``/``price``/``quantity``) and is read as version 0.
Anything unreadable decodes to an empty cart; callers never see the error.
"""

import json
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from pathlib import Path
from urllib.parse import quote

import structlog

from ordering.cart.line import CartLine

logger = structlog.get_logger(__name__)

SCHEMA_VERSION = 1


class CartStorage(ABC):
    """Key/value store for serialized carts."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the raw payload stored under ``key``, or None."""
        ...

    @abstractmethod
    def write(self, key: str, payload: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryCartStorage(CartStorage):
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, payload: str) -> None:
        self.data[key] = payload

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileCartStorage(CartStorage):
    """One JSON file per identity key under ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        # Percent-encoding keeps distinct keys on distinct files
        safe = quote(key, safe="@")
        return self.directory / f"{safe}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def encode_lines(lines: list[CartLine] | tuple[CartLine, ...]) -> str:
    return json.dumps(
        {
            "schema_version": SCHEMA_VERSION,
            "lines": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "unit_price": str(line.unit_price),
                    "quantity": line.quantity,
                }
                for line in lines
            ],
        }
    )


def _product_id(value) -> int | str:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"product id must be an int or str, got {value!r}")
    return value


def _line_from_v1(entry: dict) -> CartLine:
    return CartLine(
        product_id=_product_id(entry["product_id"]),
        name=entry["name"],
        unit_price=Decimal(str(entry["unit_price"])),
        quantity=int(entry["quantity"]),
    )


def _line_from_v0(entry: dict) -> CartLine:
    return CartLine(
        product_id=_product_id(entry["id"]),
        name=entry["name"],
        unit_price=Decimal(str(entry["price"])),
        quantity=int(entry["quantity"]),
    )


def decode_lines(payload: str | None) -> list[CartLine]:
    """Decode a stored payload; corrupt or unknown data yields an empty cart."""
    if not payload:
        return []

    try:
        data = json.loads(payload)
        if isinstance(data, list):
            lines = [_line_from_v0(entry) for entry in data]
        elif isinstance(data, dict) and data.get("schema_version") == SCHEMA_VERSION:
            lines = [_line_from_v1(entry) for entry in data.get("lines", [])]
        else:
            version = data.get("schema_version") if isinstance(data, dict) else None
            logger.warning("Unknown cart schema version, starting empty", schema_version=version)
            return []

        # Merge duplicates from hand-edited or legacy payloads so product ids stay unique
        merged: dict = {}
        for line in lines:
            existing = merged.get(line.product_id)
            merged[line.product_id] = existing.with_quantity(existing.quantity + line.quantity) if existing else line
    except (ValueError, TypeError, KeyError, InvalidOperation) as exc:
        logger.warning("Stored cart is unreadable, starting empty", error=str(exc))
        return []
    return list(merged.values())
