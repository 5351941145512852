"""Structured fetch log shared by the registry fetchers."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
}


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)
    sink: logging.Logger | None = None

    def log(
        self,
        *,
        operation: str,
        registry: str | None,
        module: str | None,
        version: str | None,
        message: str,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "registry": registry,
            "module": module,
            "version": version,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        if self.sink is not None:
            target = f"{module}@{version}" if module else "-"
            self.sink.log(LEVELS.get(level, logging.INFO), "[%s] %s: %s", registry, target, message)

    def records_for_registry(self, registry: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("registry") == registry]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(record, sort_keys=True) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path
