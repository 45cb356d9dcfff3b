"""
document.py - JSON document codec
ONE RESPONSIBILITY: Read, write and canonicalize preference documents
"""

import json
import os

from core.errors import MalformedInput, SourceMissing


def load_document(path, profile=None):
    """
    Load a JSON document from disk.

    Args:
        path: File to read
        profile: Profile name used in error messages (optional)

    Returns:
        The parsed JSON value (dict for every document this tool manages)
    """
    if not os.path.isfile(path):
        raise SourceMissing("file not found", profile=profile, artifact=path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedInput(f"not valid JSON: {e}", profile=profile, artifact=path)


def load_object(path, profile=None):
    """Load a document that must be a JSON object."""
    data = load_document(path, profile=profile)
    if not isinstance(data, dict):
        raise MalformedInput(
            f"expected a JSON object, got {type(data).__name__}",
            profile=profile,
            artifact=path
        )
    return data


def dumps(document):
    """Serialize keeping key insertion order."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def canonical(document):
    """Serialize with recursively sorted keys, for comparison only."""
    return json.dumps(document, indent=2, ensure_ascii=False, sort_keys=True) + "\n"


def same_content(left, right):
    """Deep equality that ignores key order."""
    return canonical(left) == canonical(right)
