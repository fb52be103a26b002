import pytest

from points_core.errors import ValidationError
from points_core.models import RunConfig
from points_core.validation import is_valid_email, validate_settings


def test_validate_settings_returns_trimmed_run_config(valid_settings) -> None:
    settings = dict(valid_settings, uid="  u1 ", email=" a@b.com", deviceId="d1  ", interval="5")

    config = validate_settings(settings)

    assert config == RunConfig(uid="u1", email="a@b.com", device_id="d1", interval=5)


def test_validate_settings_passes_run_options(valid_settings) -> None:
    config = validate_settings(valid_settings, settle_delay=0.5, allow_overlap=False)

    assert config.settle_delay == 0.5
    assert config.allow_overlap is False


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"uid": "   "}, "uid"),
        ({"email": ""}, "email"),
        ({"deviceId": None}, "deviceId"),
        ({"email": "userexample.com"}, "email"),
        ({"interval": 0}, "interval"),
        ({"interval": "abc"}, "interval"),
        ({"interval": -3}, "interval"),
    ],
)
def test_validate_settings_names_offending_field(valid_settings, overrides, field) -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_settings(dict(valid_settings, **overrides))

    assert exc_info.value.field == field


def test_validate_settings_checks_fields_in_order() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_settings({"uid": "", "email": "", "deviceId": "", "interval": 0})

    assert exc_info.value.field == "uid"
    assert exc_info.value.message == "User UID is required"


def test_email_presence_is_checked_before_device_id() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_settings({"uid": "u1", "email": "bad", "deviceId": "", "interval": 5})

    assert exc_info.value.field == "deviceId"


def test_email_shape() -> None:
    assert is_valid_email("user@example.com")
    assert not is_valid_email("user@@example.com")
    assert not is_valid_email("userexample.com")
    assert not is_valid_email("")
    assert not is_valid_email("user@example")
    assert not is_valid_email("us er@example.com")
