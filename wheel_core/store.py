"""JSON-file store for saved wheel configurations."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .configuration import config_from_payload, config_to_payload, validate_not_empty
from .data import CONFIGURATIONS_JSON_PATH
from .errors import ConfigurationNotFound
from .models import WheelConfig

logger = logging.getLogger(__name__)


def _empty_document() -> dict[str, Any]:
    return {"nextId": 1, "configurations": []}


def _entry_id(entry: dict[str, Any]) -> int:
    try:
        return int(entry.get("id", -1))
    except (TypeError, ValueError):
        return -1


class ConfigurationStore:
    """Saved configurations kept in a single JSON document on disk.

    The file is read on every call, so several UI pages can share it. An
    unreadable or malformed file is treated as empty.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else CONFIGURATIONS_JSON_PATH

    def _read(self) -> dict[str, Any]:
        try:
            raw_text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return _empty_document()
        except OSError as exc:
            logger.warning("Cannot read configuration store %s: %s", self.path, exc)
            return _empty_document()
        try:
            document = json.loads(raw_text)
        except json.JSONDecodeError:
            logger.warning("Configuration store %s is not valid JSON; ignoring it", self.path)
            return _empty_document()

        if not isinstance(document, dict) or not isinstance(
            document.get("configurations"), list
        ):
            return _empty_document()
        entries = [
            entry
            for entry in document["configurations"]
            if isinstance(entry, dict) and _entry_id(entry) > 0
        ]
        highest = max((_entry_id(entry) for entry in entries), default=0)
        try:
            next_id = max(int(document.get("nextId", 1)), highest + 1)
        except (TypeError, ValueError):
            next_id = highest + 1
        return {"nextId": next_id, "configurations": entries}

    def _write(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8"
        )

    def save_configuration(
        self,
        config: WheelConfig,
        name: str,
        description: str = "",
        is_public: bool = False,
    ) -> int:
        """Persist ``config`` under ``name`` and return its new id."""

        validate_not_empty(name, "Configuration name")
        document = self._read()
        config_id = document["nextId"]
        timestamp = datetime.now(timezone.utc).isoformat()
        entry = {
            "id": config_id,
            "name": name.strip(),
            "description": description,
            "isPublic": bool(is_public),
            "createdAt": timestamp,
            "updatedAt": timestamp,
            **config_to_payload(config),
        }
        document["configurations"].append(entry)
        document["nextId"] = config_id + 1
        self._write(document)
        logger.info("Saved configuration %d (%s) to %s", config_id, entry["name"], self.path)
        return config_id

    def _entry(self, config_id: int) -> dict[str, Any]:
        for entry in self._read()["configurations"]:
            if _entry_id(entry) == config_id:
                return entry
        raise ConfigurationNotFound(config_id)

    def load_configuration(self, config_id: int) -> WheelConfig:
        """Return the stored configuration, accepting legacy ``value`` prize costs.

        Raises
        ------
        ConfigurationNotFound
            If no configuration has ``config_id``.
        WheelError
            If the stored values fail validation.
        """

        return config_from_payload(self._entry(config_id))

    def describe_configuration(self, config_id: int) -> dict[str, Any]:
        """Return the stored metadata (name, description, timestamps) for one entry."""

        entry = self._entry(config_id)
        return {
            key: entry.get(key)
            for key in ("id", "name", "description", "isPublic", "createdAt", "updatedAt")
        }

    def list_configurations(self) -> list[dict[str, Any]]:
        """Return metadata and a prize count for every stored configuration, newest first."""

        summaries: list[dict[str, Any]] = []
        for entry in self._read()["configurations"]:
            prizes = entry.get("prizeConfigs")
            summaries.append(
                {
                    "id": _entry_id(entry),
                    "name": entry.get("name", ""),
                    "description": entry.get("description", ""),
                    "isPublic": bool(entry.get("isPublic", False)),
                    "totalSlots": entry.get("totalSlots"),
                    "pricePerSpin": entry.get("pricePerSpin"),
                    "prizeCount": len(prizes) if isinstance(prizes, list) else 0,
                    "updatedAt": entry.get("updatedAt"),
                }
            )
        summaries.sort(key=lambda item: item["id"], reverse=True)
        return summaries

    def delete_configuration(self, config_id: int) -> bool:
        """Remove a configuration; return False when it did not exist."""

        document = self._read()
        kept = [
            entry for entry in document["configurations"] if _entry_id(entry) != config_id
        ]
        if len(kept) == len(document["configurations"]):
            return False
        document["configurations"] = kept
        self._write(document)
        logger.info("Deleted configuration %d from %s", config_id, self.path)
        return True
