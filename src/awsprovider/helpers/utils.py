import json
from typing import Any, Optional


def reverse_dns(hostname: str) -> str:
    """
    Switch a DNS hostname to reverse DNS and vice-versa.

    >>> reverse_dns("amazonaws.com")
    'com.amazonaws'
    """
    return ".".join(reversed(hostname.split(".")))


def load_json_data(json_str: Optional[str] = None, json_file: Optional[str] = None) -> Any:
    """
    Load JSON data from a string or file.

    Args:
        json_str (str): JSON string input.
        json_file (str): Path to a JSON file.

    Returns:
        Any: Parsed JSON data as a Python object.

    Raises:
        ValueError: If neither `json_str` nor `json_file` is provided.
    """
    if json_str:
        return json.loads(json_str)

    if json_file:
        with open(json_file, encoding="utf-8") as f:
            return json.load(f)

    raise ValueError("Either `json_str` or `json_file` must be provided.")
