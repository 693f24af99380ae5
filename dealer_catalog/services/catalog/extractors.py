"""
Field extractors for raw dealer records.
========================================
Each extractor takes one raw JSON value and returns either its canonical
form or None ("absent"). Extractors never raise: shape violations are
expected in dealer exports and are mapped to None by `degrade_to_absent`.

Shapes handled:
- localized text: "Widget" | [{"locale": "fr", "value": "Vis"}] | {"en": "Widget"}
- attributes: [{"templateAttributes": [{"fieldSlug": "color", "value": "red"}]}]
- DC sub-documents: attributes["dc_availability"] / attributes["dc_specific"],
  either an object or a JSON-encoded string
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

DEFAULT_LOCALE = "en"
DC_AVAILABILITY_KEY = "dc_availability"
DC_SPECIFIC_KEY = "dc_specific"


def degrade_to_absent(func: Callable[P, T | None]) -> Callable[P, T | None]:
    """Map shape errors raised inside an extractor to None.

    This is the single place where record-level errors are suppressed;
    anything that is not a shape error still propagates.
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T | None:
        try:
            return func(*args, **kwargs)
        except (TypeError, ValueError, AttributeError, KeyError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; nesting too deep to decode is RecursionError
            logger.debug("[CATALOG:NORMALIZE] %s degraded to absent: %s", func.__name__, e)
            return None

    return wrapper


def as_text(value: Any) -> str:
    """String form of a JSON scalar, spelled the way JSON spells it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if value is None:
        return ""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def optional_text(value: Any) -> str | None:
    """String form of a scalar identity field; missing or null stays None."""
    if value is None:
        return None
    return as_text(value)


@degrade_to_absent
def decode_json_value(value: Any) -> Any:
    """Decode `value` if it is a JSON string, otherwise return it unchanged."""
    if isinstance(value, (str, bytes, bytearray)):
        return json.loads(value)
    return value


@degrade_to_absent
def extract_locale_map(value: Any) -> dict[str, str] | None:
    """Normalize a localized text field into {locale: text}.

    Returns None for falsy input, for unsupported shapes (numbers, booleans),
    and for arrays in which no item carries a `value`.
    """
    if not value:
        return None

    if isinstance(value, str):
        return {DEFAULT_LOCALE: value}

    if isinstance(value, list):
        out: dict[str, str] = {}
        for item in value:
            if not isinstance(item, dict) or "value" not in item:
                continue
            locale = item.get("locale")
            out[as_text(locale) if locale is not None else DEFAULT_LOCALE] = as_text(item["value"])
        return out or None

    if isinstance(value, dict):
        # null is spelled out here, unlike a null `value` in the array shape
        return {as_text(locale): "null" if text is None else as_text(text) for locale, text in value.items()}

    return None


@degrade_to_absent
def flatten_attributes(value: Any) -> dict[str, Any] | None:
    """Collapse template groups into one {fieldSlug: value} map.

    Groups are applied in input order, so a later group overwrites an
    earlier one on the same fieldSlug. Values keep their JSON type.
    """
    if not value or not isinstance(value, list):
        return None

    out: dict[str, Any] = {}
    for group in value:
        if not isinstance(group, dict):
            continue
        template_attributes = group.get("templateAttributes")
        if not isinstance(template_attributes, list):
            continue
        for attr in template_attributes:
            if not isinstance(attr, dict):
                continue
            field_slug = as_text(attr.get("fieldSlug"))
            out[field_slug] = attr.get("value")

    return out or None


@degrade_to_absent
def resolve_sub_document(attributes: dict[str, Any] | None, key: str) -> dict[str, Any] | None:
    """Pull `key` out of flattened attributes and decode it into an object.

    Missing keys, falsy values, undecodable strings and decoded values that
    are not JSON objects all resolve to None.
    """
    if not attributes:
        return None

    raw = attributes.get(key)
    if not raw:
        return None

    decoded = decode_json_value(raw)
    if not isinstance(decoded, dict):
        return None
    return {as_text(code): entry for code, entry in decoded.items()}


def extract_dc_availability(attributes: dict[str, Any] | None) -> dict[str, Any] | None:
    """Distribution-center availability: {dc_code: {region: 0|1}}."""
    return resolve_sub_document(attributes, DC_AVAILABILITY_KEY)


def extract_dc_specific(attributes: dict[str, Any] | None) -> dict[str, Any] | None:
    """Distribution-center specific overrides: {dc_code: {...}}."""
    return resolve_sub_document(attributes, DC_SPECIFIC_KEY)
