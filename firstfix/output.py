from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def write_json(path: str | Path, payload: Any) -> Path:
    """Write a search result set or starter kit (anything with ``to_dict``) as JSON."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = payload.to_dict() if hasattr(payload, "to_dict") else payload
    p.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return p
