"""
Tests for LicenseRecord validation and expiration rules.
"""

from datetime import date, datetime, timedelta

import pytest

from pullpreview_license.licensing import (
    LICENSE_SCHEMAS,
    LicenseRecord,
    LicenseType,
    LicenseValidationError,
)

TODAY = date(2026, 10, 17)


class TestConstruction:
    """Test attribute filtering at construction"""

    def test_unknown_keys_are_dropped(self):
        record = LicenseRecord({"type": "trial", "expires_at": TODAY, "seats": 10, "owner": "acme"})

        assert record.attributes == {"type": "trial", "expires_at": TODAY}

    def test_keys_are_string_normalized(self):
        class Key:
            def __str__(self):
                return "type"

        record = LicenseRecord({Key(): "trial"})

        assert record.attributes == {"type": "trial"}

    def test_custom_allow_list(self):
        record = LicenseRecord(
            {"type": "trial", "expires_at": TODAY, "seats": 10},
            allowed_attributes=("type", "expires_at", "seats"),
        )

        assert record.attributes["seats"] == 10

    def test_none_attributes(self):
        assert LicenseRecord(None).attributes is None

    def test_non_mapping_is_a_programming_error(self):
        with pytest.raises(TypeError, match="must be a mapping"):
            LicenseRecord(["type", "trial"])

    def test_equality_compares_attributes(self):
        assert LicenseRecord({"type": "trial"}) == LicenseRecord({"type": "trial", "x": 1})
        assert LicenseRecord({"type": "trial"}) != LicenseRecord({})


class TestValidation:
    """Test validation_error priority order and reasons"""

    def test_valid_trial(self):
        record = LicenseRecord({"type": "trial", "expires_at": TODAY})

        assert record.validation_error() is None
        assert record.is_valid()
        record.validate()

    def test_no_attributes(self):
        assert LicenseRecord(None).validation_error() == "no attributes"

    def test_attributes_not_a_mapping(self):
        record = LicenseRecord({})
        record.attributes = ["type", "trial"]

        assert record.validation_error() == "attributes is not a mapping"

    def test_missing_type_reported_before_missing_expiration(self):
        """Test rule priority: type is checked before expires_at"""
        assert LicenseRecord({}).validation_error() == "no type attribute"

    def test_trial_without_expiration(self):
        assert LicenseRecord({"type": "trial"}).validation_error() == "no trial expiration date"

    @pytest.mark.parametrize("value", ["2030-01-01", 20300101, datetime(2030, 1, 1, 12, 0), None])
    def test_trial_expiration_must_be_a_date(self, value):
        record = LicenseRecord({"type": "trial", "expires_at": value})

        assert record.validation_error() == "trial expiration date is not a date"

    def test_extraneous_attributes(self):
        record = LicenseRecord(
            {"type": "trial", "expires_at": TODAY, "seats": 5},
            allowed_attributes=("type", "expires_at", "seats"),
        )

        assert record.validation_error() == "extraneous attributes: seats"

    def test_extraneous_attributes_added_after_construction(self):
        record = LicenseRecord({"type": "trial", "expires_at": TODAY})
        record.attributes["plan"] = "gold"

        assert record.validation_error().startswith("extraneous attributes")

    @pytest.mark.parametrize(
        "attributes",
        [
            {"type": "enterprise"},
            {"type": "enterprise", "expires_at": TODAY},
        ],
    )
    def test_unexpected_type(self, attributes):
        """Test unsupported types are invalid regardless of other fields"""
        record = LicenseRecord(attributes)

        assert record.validation_error() == "unexpected type: enterprise"
        assert not record.is_valid()

    def test_enum_member_is_not_a_type_string(self):
        """Test the type must be the serialized string, not a LicenseType member"""
        record = LicenseRecord({"type": LicenseType.TRIAL, "expires_at": TODAY})

        assert record.license_type is None
        assert record.validation_error() == "unexpected type: LicenseType.TRIAL"

    def test_validate_raises_with_reason(self):
        with pytest.raises(LicenseValidationError, match="License is invalid: no type attribute") as exc_info:
            LicenseRecord({}).validate()

        assert exc_info.value.reason == "no type attribute"


class TestExpiration:
    """Test is_expired boundary behaviour"""

    def test_expires_on_expiration_date(self):
        """Test expiration is inclusive of the expiration date"""
        record = LicenseRecord({"type": "trial", "expires_at": TODAY})

        assert record.is_expired(today=TODAY)

    def test_not_expired_day_before(self):
        record = LicenseRecord({"type": "trial", "expires_at": TODAY + timedelta(days=1)})

        assert not record.is_expired(today=TODAY)

    def test_expired_after_date(self):
        record = LicenseRecord({"type": "trial", "expires_at": TODAY - timedelta(days=30)})

        assert record.is_expired(today=TODAY)

    def test_defaults_to_current_date(self):
        assert LicenseRecord({"type": "trial", "expires_at": date.today()}).is_expired()
        assert not LicenseRecord({"type": "trial", "expires_at": date.today() + timedelta(days=1)}).is_expired()

    def test_without_expiration_never_expires(self):
        assert not LicenseRecord({"type": "trial"}).is_expired(today=TODAY)
        assert not LicenseRecord(None).is_expired(today=TODAY)

    def test_iso_string_is_parsed(self):
        record = LicenseRecord({"type": "trial", "expires_at": "2026-10-17"})

        assert record.is_expired(today=TODAY)

    def test_unreadable_expiration_raises(self):
        record = LicenseRecord({"type": "trial", "expires_at": "next tuesday"})

        with pytest.raises(LicenseValidationError, match="not a date"):
            record.is_expired(today=TODAY)


class TestRendering:
    """Test JSON rendering"""

    def test_to_json_is_canonical(self):
        record = LicenseRecord({"type": "trial", "expires_at": date(2030, 1, 2)})

        assert record.to_json() == '{"expires_at":"2030-01-02","type":"trial"}'

    def test_str_is_pretty_json(self):
        record = LicenseRecord({"type": "trial", "expires_at": date(2030, 1, 2)})

        assert str(record) == '{\n  "expires_at": "2030-01-02",\n  "type": "trial"\n}'


class TestSchemas:
    """Test the license type registry"""

    def test_every_type_has_a_schema(self):
        assert set(LICENSE_SCHEMAS) == set(LicenseType)

    def test_trial_schema_attributes(self):
        assert LICENSE_SCHEMAS[LicenseType.TRIAL].attribute_names == ("type", "expires_at")

    def test_license_type_property(self):
        assert LicenseRecord({"type": "trial"}).license_type is LicenseType.TRIAL
        assert LicenseRecord({"type": "enterprise"}).license_type is None
