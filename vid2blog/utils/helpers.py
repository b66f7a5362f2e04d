"""
Helper utility functions for the Vid2Blog application.
"""

import os
import json
import re
from typing import Dict, Any


def slugify(text: str, max_length: int = 80) -> str:
    """
    Turn text into a lowercase, hyphen-separated slug.

    Args:
        text: Text to slugify
        max_length: Maximum slug length

    Returns:
        Slug such as ``"tech-talks-daily"``, or an empty string for text with no word characters
    """
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    slug = re.sub(r"[\s_-]+", "-", slug).strip("-")
    return slug[:max_length].rstrip("-")


def truncate_text(text: str, limit: int) -> str:
    """
    Cap text at ``limit`` characters, ending truncated text with ``...``.

    Args:
        text: Text to cap
        limit: Maximum length including the ellipsis

    Returns:
        The text itself when it fits, otherwise its first ``limit - 3`` characters plus ``...``
    """
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def save_json(data: Dict[str, Any], filepath: str, pretty: bool = True) -> None:
    """
    Save data to a JSON file.

    Args:
        data: Data to save
        filepath: Path to save the file
        pretty: Whether to format the JSON for readability
    """
    with open(filepath, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            json.dump(data, f, ensure_ascii=False)


def load_json(filepath: str) -> Dict[str, Any]:
    """
    Load data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Loaded JSON data
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def ensure_dir(directory: str) -> None:
    """Ensure a directory exists, creating it if necessary."""
    os.makedirs(directory, exist_ok=True)
