"""
Canonical JSON encoding of license attributes.

Dates are written as ``YYYY-MM-DD``. JSON has no date type, so decoding has
to be told which fields are dates in order to restore them.
"""

import json
import logging
from typing import Any, Dict, Iterable, Mapping

from .exceptions import ParseError
from .models import DEFAULT_DATE_ATTRIBUTES, json_default, parse_date

logger = logging.getLogger(__name__)


def dump_attributes(attributes: Mapping[str, Any]) -> bytes:
    """Serialize attributes to compact, key-sorted UTF-8 JSON."""
    return json.dumps(
        dict(attributes), sort_keys=True, separators=(",", ":"), default=json_default
    ).encode("utf-8")


def load_attributes(
    payload: bytes,
    date_attributes: Iterable[str] = DEFAULT_DATE_ATTRIBUTES,
) -> Dict[str, Any]:
    """
    Parse decrypted license bytes into an attribute dict.

    Date-typed fields holding a ``YYYY-MM-DD`` string come back as ``date``.
    Other values for those fields are left untouched so that validation can
    report them.

    Raises:
        ParseError: If the payload is not UTF-8 JSON describing an object
    """
    try:
        attributes = json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ParseError("License data is not valid UTF-8") from e
    except json.JSONDecodeError as e:
        raise ParseError("License data is invalid JSON", details=f"line {e.lineno}, column {e.colno}") from e

    if not isinstance(attributes, dict):
        raise ParseError("License data is not a JSON object", details=type(attributes).__name__)

    for name in date_attributes:
        value = attributes.get(name)
        if isinstance(value, str):
            try:
                attributes[name] = parse_date(value)
            except ValueError:
                logger.warning("License attribute %s is not a YYYY-MM-DD date", name)

    return attributes
