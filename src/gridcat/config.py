"""Runtime settings, from defaults and ``GRIDCAT_*`` environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from gridcat.layout import resolve_grid
from gridcat.types import DEFAULT_GRID_SIZE, GridConfig

DEFAULT_MAX_IMAGES = 100
LOG_LEVELS = ("debug", "info", "warning", "error")

_INT_ENV = {
    "columns": "GRIDCAT_COLUMNS",
    "rows": "GRIDCAT_ROWS",
    "max_images": "GRIDCAT_MAX_IMAGES",
    "workers": "GRIDCAT_WORKERS",
}


def _default_workers() -> int:
    return max(1, min(4, os.cpu_count() or 1))


@dataclass
class Settings:
    columns: int = DEFAULT_GRID_SIZE
    rows: int = DEFAULT_GRID_SIZE
    max_images: int = DEFAULT_MAX_IMAGES
    workers: int = field(default_factory=_default_workers)
    recursive: bool = False
    watch: bool = False
    log_level: str = "warning"

    @property
    def grid(self) -> GridConfig:
        return resolve_grid(GridConfig(columns=self.columns, rows=self.rows))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        if environ is None:
            environ = os.environ
        settings = cls()
        values: dict[str, Any] = {}
        for name, var in _INT_ENV.items():
            raw = environ.get(var)
            if raw is None or not raw.strip():
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                print(f"Ignoring {var}={raw!r}: not an integer", file=sys.stderr)

        level = environ.get("GRIDCAT_LOG_LEVEL", "").strip().lower()
        if level:
            if level in LOG_LEVELS:
                values["log_level"] = level
            else:
                print(f"Ignoring GRIDCAT_LOG_LEVEL={level!r}", file=sys.stderr)

        return replace(settings, **values)

    def override(self, **changes: Any) -> Settings:
        """Copy with every non-``None`` value in *changes* applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
