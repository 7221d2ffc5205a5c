from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger("otd.utils.data_store")

DEFAULT_DATA_PATH = "~/.config/on-this-day/data.json"


def default_data_path() -> Path:
    return Path(os.environ.get("ON_THIS_DAY_DATA_PATH") or DEFAULT_DATA_PATH).expanduser()


class DataStore:
    """File-backed key-value document holding the plugin data.

    The whole object is read and written at once; the last write wins.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path).expanduser() if path is not None else default_data_path()

    def load_data(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            # Corrupt or unreadable store; fall back to defaults
            logger.warning("Could not read plugin data from %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring plugin data in %s: expected a JSON object", self.path)
            return None
        return data

    def save_data(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Saved plugin data to %s", self.path)
