import json
import os
from typing import Any, Dict, List

import pandas as pd

_GRID_FIELDS = ("cells", "hConstraints", "vConstraints", "h_constraints", "v_constraints", "grid")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .parquet, .csv, .json and .jsonl formats.
    Returns a list of raw puzzle dictionaries (grids still unparsed).
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _decode(value: Any) -> Any:
        # Tabular sources store nested matrices as JSON text (csv) or arrays of arrays (parquet).
        if isinstance(value, str) and value.strip()[:1] in ("[", "{"):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        if hasattr(value, "tolist"):
            value = value.tolist()
        if isinstance(value, (list, tuple)):
            return [_decode(v) for v in value]
        if isinstance(value, dict):
            return {k: _decode(v) for k, v in value.items()}
        return value

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        for key in _GRID_FIELDS:
            if key in record:
                record[key] = _decode(record[key])
        if record.get("id") is None or str(record.get("id")).strip() == "":
            record["id"] = f"puzzle-{index}"
        return record

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        dicts = [r for r in records if isinstance(r, dict)]
        return [_normalize_record(r, i) for i, r in enumerate(dicts, start=1)]

    # Case 1: Parquet / CSV (tabular)
    if file_path.endswith(".parquet") or file_path.endswith(".csv"):
        try:
            if file_path.endswith(".parquet"):
                df = pd.read_parquet(file_path)
            else:
                df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
            return _normalize_all(df.to_dict(orient="records"))
        except Exception as e:
            print(f"Error reading {file_path}: {e}")
            return []

    # Case 2: JSON File (Text; array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _normalize_all(payload)
            if isinstance(payload, dict):
                return _normalize_all([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 3: JSONL File (Text)
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            data.append(obj)
    return _normalize_all(data)
