"""Catalog loading.

The catalog is read once at startup and never mutated. A JSON catalog is an
array of objects like::

    {"code": "PL", "name": "Poland", "continent": "Europe",
     "colors": ["white", "red"], "layout": "bicolor"}

``category`` is accepted in place of ``continent``.
"""

import json
import logging
from pathlib import Path

from flagmaster.catalog.content import SEED_CATALOG
from flagmaster.db.models import Item

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """No usable items are available to build a session from."""


def item_from_dict(data: dict) -> Item:
    """Build an Item from one catalog record."""
    code = str(data.get("code", "")).strip()
    name = str(data.get("name", "")).strip()
    if not code or not name:
        raise CatalogError(f"Catalog entry is missing a code or name: {data!r}")

    return Item(
        code=code,
        name=name,
        category=str(data.get("continent") or data.get("category") or ""),
        colors=tuple(str(color) for color in data.get("colors") or ()),
        layout=str(data.get("layout") or ""),
    )


def load_catalog(path: str | Path | None = None) -> list[Item]:
    """Load the item catalog.

    Args:
        path: JSON catalog file. None or "" uses the built-in catalog.

    Returns:
        Items in file order, de-duplicated by code (first wins).

    Raises:
        CatalogError: If the file is missing, unreadable or has no items.
    """
    if not path:
        items = list(SEED_CATALOG)
    else:
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogError(f"Could not read catalog {path}: {exc}") from exc

        if not isinstance(raw, list):
            raise CatalogError(f"Catalog {path} must contain a JSON array")
        items = [item_from_dict(entry) for entry in raw if isinstance(entry, dict)]

    unique: dict[str, Item] = {}
    for item in items:
        if item.code in unique:
            logger.warning(f"Duplicate catalog code {item.code}, keeping the first entry")
            continue
        unique[item.code] = item

    if not unique:
        raise CatalogError("No items available")

    logger.info(f"Loaded catalog with {len(unique)} items")
    return list(unique.values())


def categories(items: list[Item]) -> list[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(item.category for item in items if item.category))
