from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .pipeline import RunReport
from .report import report_to_dict

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML report requested but PyYAML is not available. "
            "Use a .json report path or install PyYAML."
        ) from e
    return yaml


def save_report(path: str, report: RunReport) -> None:
    """Write the last run report for the operator. Never read back by the sequencer."""

    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)

    data = report_to_dict(report)
    if _detect_format(p) == "json":
        p.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    else:
        p.write_text(_yaml().safe_dump(data, sort_keys=False), encoding="utf-8")
    logger.info("Run report written to %s", p)


def load_report(path: str) -> Dict[str, Any]:
    p = Path(path).expanduser()
    if not p.exists():
        return {}

    if _detect_format(p) == "json":
        data = json.loads(p.read_text(encoding="utf-8"))
    else:
        data = _yaml().safe_load(p.read_text(encoding="utf-8")) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Report file must be an object/dict, got {type(data)}")
    return data
