# src/folio_shell/core/services/json_service.py
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union


def to_json(data: Any, indent: int = 2, ensure_ascii: bool = False) -> str:
    """
    Convert Python object to JSON string.

    Args:
        data: Python object (dict, list, etc.)
        indent: Indentation level for pretty-printing (default: 2)
        ensure_ascii: If True, escape non-ASCII chars (default: False)

    Returns:
        str: JSON string
    """
    return json.dumps(data, ensure_ascii=ensure_ascii, indent=indent, default=str)


def load_json_file(path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """Reads a JSON object from disk. A missing path argument yields an empty dict."""
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def read_text_file(path: Union[str, Path]) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
