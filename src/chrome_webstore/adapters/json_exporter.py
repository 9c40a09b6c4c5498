"""JSON export of operation results.

Stable layout (sorted keys, UTF-8, store image names) so exported files can be
diffed between runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel


def to_jsonable(result: BaseModel | Sequence[BaseModel] | str) -> Any:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    return [entry.model_dump(mode="json", by_alias=True) for entry in result]


def dumps_result(result: BaseModel | Sequence[BaseModel] | str) -> str:
    return json.dumps(to_jsonable(result), ensure_ascii=False, indent=2, sort_keys=True)


def export_result_json(*, result: BaseModel | Sequence[BaseModel] | str, output_path: Path) -> Path:
    """Write `result` to `output_path` as JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_result(result) + "\n", encoding="utf-8")
    return output_path
