"""
License record and license type schemas.

A record is a filtered attribute mapping; what makes it valid is decided by
the schema registered for its ``type``.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from .exceptions import LicenseValidationError

DEFAULT_ALLOWED_ATTRIBUTES: Tuple[str, ...] = ("type", "expires_at")
DEFAULT_DATE_ATTRIBUTES: Tuple[str, ...] = ("expires_at",)

DATE_FORMAT = "%Y-%m-%d"


class LicenseType(Enum):
    """Supported license kinds."""

    TRIAL = "trial"


@dataclass(frozen=True)
class SchemaField:
    """A required attribute of a license kind."""

    name: str
    value_type: type
    description: str

    def matches(self, value: Any) -> bool:
        # datetime subclasses date but does not serialize as YYYY-MM-DD
        if self.value_type is date and isinstance(value, datetime):
            return False
        return isinstance(value, self.value_type)


@dataclass(frozen=True)
class LicenseSchema:
    """Required fields of one license kind; no other attributes are allowed."""

    license_type: LicenseType
    fields: Tuple[SchemaField, ...]

    @property
    def attribute_names(self) -> Tuple[str, ...]:
        return ("type",) + tuple(f.name for f in self.fields)

    def validation_error(self, attributes: Mapping) -> Optional[str]:
        for schema_field in self.fields:
            if schema_field.name not in attributes:
                return f"no {schema_field.description}"
            if not schema_field.matches(attributes[schema_field.name]):
                return f"{schema_field.description} is not a {schema_field.value_type.__name__}"

        extraneous = sorted(set(attributes) - set(self.attribute_names))
        if extraneous:
            return f"extraneous attributes: {', '.join(extraneous)}"

        return None


LICENSE_SCHEMAS: Dict[LicenseType, LicenseSchema] = {
    LicenseType.TRIAL: LicenseSchema(
        license_type=LicenseType.TRIAL,
        fields=(SchemaField("expires_at", date, "trial expiration date"),),
    ),
}


def parse_date(value: Any) -> date:
    """
    Coerce a date, datetime or ``YYYY-MM-DD`` string to a date.

    Raises:
        ValueError: If the value cannot be read as a calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value, DATE_FORMAT).date()
    raise ValueError(f"not a date: {type(value).__name__}")


def json_default(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class LicenseRecord:
    """
    A license: a mapping of allow-listed attributes.

    Unknown attribute names are dropped silently at construction. The
    attributes stay mutable; call :meth:`validate` before exporting.

    Example:
        >>> record = LicenseRecord({"type": "trial", "expires_at": date(2030, 1, 1), "seats": 5})
        >>> record.attributes
        {'type': 'trial', 'expires_at': datetime.date(2030, 1, 1)}
        >>> record.is_valid()
        True
    """

    def __init__(
        self,
        attributes: Optional[Mapping] = None,
        allowed_attributes: Iterable[str] = DEFAULT_ALLOWED_ATTRIBUTES,
    ) -> None:
        self.allowed_attributes = tuple(allowed_attributes)

        if attributes is None:
            self.attributes: Any = None
        elif isinstance(attributes, Mapping):
            self.attributes = {
                str(key): value
                for key, value in attributes.items()
                if str(key) in self.allowed_attributes
            }
        else:
            raise TypeError(f"License attributes must be a mapping, not {type(attributes).__name__}")

    @property
    def license_type(self) -> Optional[LicenseType]:
        """The record's kind, or None when absent or unsupported."""
        if not isinstance(self.attributes, Mapping):
            return None
        # Only the serialized string form is accepted, not LicenseType members
        value = self.attributes.get("type")
        if not isinstance(value, str):
            return None
        try:
            return LicenseType(value)
        except ValueError:
            return None

    @property
    def expires_at(self) -> Any:
        if not isinstance(self.attributes, Mapping):
            return None
        return self.attributes.get("expires_at")

    def validation_error(self) -> Optional[str]:
        """Return the first failing rule, or None if the record is valid."""
        if self.attributes is None:
            return "no attributes"
        if not isinstance(self.attributes, Mapping):
            return "attributes is not a mapping"
        if "type" not in self.attributes:
            return "no type attribute"

        license_type = self.license_type
        if license_type is None:
            return f"unexpected type: {self.attributes['type']}"

        return LICENSE_SCHEMAS[license_type].validation_error(self.attributes)

    def is_valid(self) -> bool:
        return self.validation_error() is None

    def validate(self) -> None:
        """
        Raises:
            LicenseValidationError: With the first failing rule as its reason
        """
        reason = self.validation_error()
        if reason is not None:
            raise LicenseValidationError(reason)

    def is_expired(self, today: Optional[date] = None) -> bool:
        """
        True once ``today`` reaches ``expires_at``.

        A license expires on its expiration date, not the day after. Records
        without ``expires_at`` never expire.

        Raises:
            LicenseValidationError: If ``expires_at`` is not readable as a date
        """
        value = self.expires_at
        if value is None:
            return False

        try:
            expires_at = parse_date(value)
        except ValueError as e:
            raise LicenseValidationError("trial expiration date is not a date") from e

        return (today or date.today()) >= expires_at

    def to_json(self) -> str:
        """Canonical compact JSON (sorted keys, ISO dates)."""
        return json.dumps(self.attributes, sort_keys=True, separators=(",", ":"), default=json_default)

    def __str__(self) -> str:
        return json.dumps(self.attributes, indent=2, sort_keys=True, default=json_default)

    def __repr__(self) -> str:
        return f"LicenseRecord(attributes={self.attributes!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LicenseRecord):
            return NotImplemented
        return self.attributes == other.attributes
