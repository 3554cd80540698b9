import json
from typing import Any, List, Optional


def decode_images(value: Optional[str]) -> List[str]:
    """
    Decode the stored image column into an ordered list of urls.

    Legacy rows may hold NULL, an empty string, broken JSON or a JSON value
    that is not an array. All of those read as an empty list; callers never
    see a decode error. Non-string entries inside an array are dropped.
    """
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [item for item in parsed if isinstance(item, str)]


def encode_images(images: List[str]) -> str:
    return json.dumps(list(images))


def clean_images(values: List[Any]) -> List[str]:
    """Trim entries and drop the ones that are empty or not strings."""
    cleaned = []
    for value in values:
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value:
            cleaned.append(value)
    return cleaned
