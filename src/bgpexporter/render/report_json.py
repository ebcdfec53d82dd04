import json
from pathlib import Path

from bgpexporter.core.model import NeighborRecord


def records_payload(records: list[NeighborRecord]) -> dict:
    return {"neighbors": [r.to_dict() for r in records], "count": len(records)}


def write_json_report(payload: dict, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
