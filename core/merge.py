"""
merge.py - Recursive merge and template-scoped export
ONE RESPONSIBILITY: Combine preference documents

Merge policy:
    - object + object -> recursive merge per key
    - anything else   -> override value replaces base value (arrays included)
    - keys only in base are kept as they are

Export (deep pick) walks the template's keys and copies the live values
found at the same paths. Keys the live document lacks are left out.
"""

import copy
from typing import Any, Dict

from core.errors import MalformedInput


def _require_object(document, role):
    if not isinstance(document, dict):
        raise MalformedInput(f"{role} document must be a JSON object, got {type(document).__name__}")


def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into base without mutating either input.

    Args:
        base: Live document whose keys are preserved
        override: Template whose values win on shared key paths

    Returns:
        dict: New merged document
    """
    _require_object(base, "base")
    _require_object(override, "override")
    return _merge_objects(base, override)


def _merge_objects(base, override):
    result = copy.deepcopy(base)

    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = _merge_objects(current, value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def export_pick(live: Dict[str, Any], template: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract the values of live that sit at key paths defined by template.

    The output follows the template's key order. Leaves come from live
    verbatim, even when their type differs from the template's leaf.
    """
    _require_object(live, "live")
    _require_object(template, "template")
    return _pick(live, template)


def _pick(live, template):
    if not (isinstance(live, dict) and isinstance(template, dict)):
        return copy.deepcopy(live)

    picked = {}
    for key, shape in template.items():
        if key in live:
            picked[key] = _pick(live[key], shape)
    return picked
