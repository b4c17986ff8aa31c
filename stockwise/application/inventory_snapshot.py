"""Load and validate inventory snapshots from CSV or JSON.

The finance calculations trust their input; this module is where raw rows
from the inventory backend export are checked before they get there.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable, Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any

from stockwise.domain.inventory import InventoryItem
from stockwise.domain.money import to_decimal
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)

# Field aliases as exported by the inventory backend (camelCase) and by hand-written CSVs.
_COST_KEYS = ("cost_price", "costPrice", "cost")
_ID_KEYS = ("id", "_id", "sku")


class InventorySnapshotError(ValueError):
    """A snapshot row is missing required fields or holds invalid values."""


def _first(row: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def _parse_quantity(raw: Any, where: str) -> int:
    try:
        quantity = to_decimal(raw)
    except (TypeError, ValueError) as exc:
        raise InventorySnapshotError(f"{where}: quantity is not a number: {raw!r}") from exc
    if quantity != quantity.to_integral_value():
        raise InventorySnapshotError(f"{where}: quantity must be a whole number: {raw!r}")
    if quantity < 0:
        raise InventorySnapshotError(f"{where}: quantity must not be negative: {raw!r}")
    return int(quantity)


def _parse_money(raw: Any, field_name: str, where: str) -> Decimal:
    try:
        value = to_decimal(raw)
    except (TypeError, ValueError) as exc:
        raise InventorySnapshotError(f"{where}: {field_name} is not a number: {raw!r}") from exc
    if not value.is_finite() or value < 0:
        raise InventorySnapshotError(f"{where}: {field_name} must be a non-negative amount: {raw!r}")
    return value


def parse_inventory_item(row: Mapping[str, Any], index: int) -> InventoryItem:
    """Validate one raw row into an InventoryItem.

    Args:
        row: Mapping from a CSV reader or decoded JSON.
        index: 1-based row number used in error messages.
    """
    where = f"row {index}"
    name = str(row.get("name") or "").strip()
    if not name:
        raise InventorySnapshotError(f"{where}: missing item name")
    where = f"row {index} ({name})"

    if _first(row, ("quantity",)) is None:
        raise InventorySnapshotError(f"{where}: missing quantity")
    if _first(row, ("price",)) is None:
        raise InventorySnapshotError(f"{where}: missing price")

    raw_cost = _first(row, _COST_KEYS)
    category = str(row.get("category") or "").strip() or None
    item_id = _first(row, _ID_KEYS)

    return InventoryItem(
        id=str(item_id) if item_id is not None else str(index),
        name=name,
        quantity=_parse_quantity(row["quantity"], where),
        price=_parse_money(row["price"], "price", where),
        category=category,
        cost_price=_parse_money(raw_cost, "cost price", where) if raw_cost is not None else None,
    )


def parse_inventory_rows(rows: Iterable[Mapping[str, Any]]) -> list[InventoryItem]:
    return [parse_inventory_item(row, index) for index, row in enumerate(rows, 1)]


def load_inventory_snapshot(path: Path) -> list[InventoryItem]:
    """Read a ``.csv`` or ``.json`` inventory export.

    JSON may be a list of items or an object with an ``items`` list.

    Raises:
        FileNotFoundError: the file does not exist.
        InventorySnapshotError: unsupported format or invalid rows.
    """
    if not path.exists():
        raise FileNotFoundError(f"Inventory file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            items = parse_inventory_rows(csv.DictReader(f))
    elif suffix == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, Mapping):
            data = data.get("items", [])
        if not isinstance(data, list) or not all(isinstance(row, Mapping) for row in data):
            raise InventorySnapshotError(f"{path}: expected a list of item objects")
        items = parse_inventory_rows(data)
    else:
        raise InventorySnapshotError(f"Unsupported inventory file type: {path.suffix or path.name}")

    logger.debug("Loaded %d inventory items from %s", len(items), path)
    return items
