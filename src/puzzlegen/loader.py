import json
import os
from typing import Any, Dict, List

import pandas as pd


def load_requests(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads generation requests from a file. Handles .json, .jsonl, .csv and
    .parquet formats. Returns a list of raw request dictionaries.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    # Case 1: tabular files go through pandas
    if file_path.endswith(".parquet") or file_path.endswith(".csv"):
        if file_path.endswith(".parquet"):
            df = pd.read_parquet(file_path)
        else:
            df = pd.read_csv(file_path)
        df = df.astype(object).where(pd.notna(df), None)
        return [_normalize_record(r) for r in df.to_dict(orient="records")]

    # Case 2: JSON file (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            return _read_json_lines(file_path)
        if isinstance(payload, list):
            return [_normalize_record(p) for p in payload if isinstance(p, dict)]
        if isinstance(payload, dict):
            return [_normalize_record(payload)]
        return []

    # Case 3: JSONL file
    return _read_json_lines(file_path)


def _read_json_lines(file_path: str) -> List[Dict[str, Any]]:
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(_normalize_record(obj))
    return data


def _normalize_record(record: Dict[str, Any]) -> Dict[str, Any]:
    # Column headers from spreadsheets often carry stray whitespace.
    return {str(key).strip(): value for key, value in record.items()}
