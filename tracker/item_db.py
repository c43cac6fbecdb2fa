"""
Item reference table.

Maps item ids to display names. Loaded once at startup from the osrsreboxed
item dump (JSON) or an equivalent YAML file; read-only afterwards.
"""
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)


class ItemDatabase:
    """Immutable item id to name lookup."""

    def __init__(self, items: Optional[Mapping[int, str]] = None):
        self._items = MappingProxyType(dict(items or {}))

    @classmethod
    def from_file(cls, path: str) -> "ItemDatabase":
        """
        Load the table from a file.

        The file maps item id strings to objects with a "name" key, e.g.
        {"4151": {"id": 4151, "name": "Abyssal whip", ...}}. Entries with a
        non-numeric id or no name are skipped.

        Args:
            path: Path to a JSON or YAML item file

        Returns:
            ItemDatabase, empty if the file is missing or unreadable
        """
        item_path = Path(path)

        if not item_path.exists():
            logger.warning(f"Item database {path} not found, item names will not be resolved")
            return cls()

        logger.info(f"Loading item database from {path}...")
        try:
            with open(item_path, 'r', encoding='utf-8') as f:
                if item_path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load item database: {e}. Item names will not be resolved.")
            return cls()

        items = cls._parse(data)
        logger.info(f"Loaded {len(items)} items")
        return cls(items)

    @staticmethod
    def _parse(data: Any) -> Dict[int, str]:
        items = {}
        if not isinstance(data, dict):
            return items

        for id_str, item_data in data.items():
            try:
                item_id = int(id_str)
            except (TypeError, ValueError):
                continue
            if not isinstance(item_data, dict):
                continue
            name = item_data.get("name")
            if isinstance(name, str):
                items[item_id] = name

        return items

    def get(self, item_id: int) -> Optional[str]:
        return self._items.get(item_id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)
