"""
Settings validation — gates whether a run may start.
"""

import re

from .errors import ValidationError
from .models import RunConfig

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email):
    return bool(EMAIL_PATTERN.fullmatch(email or ""))


def _parse_interval(raw):
    if isinstance(raw, bool):
        return None
    try:
        interval = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return interval if interval > 0 else None


def validate_settings(settings, **run_options):
    """
    Turn a {uid, email, deviceId, interval} record into a RunConfig.
    Checks run in order and stop at the first failure; nothing is defaulted.
    Extra keyword arguments (settle_delay, allow_overlap) pass to RunConfig.
    """
    uid = str(settings.get("uid") or "").strip()
    email = str(settings.get("email") or "").strip()
    device_id = str(settings.get("deviceId") or "").strip()

    if not uid:
        raise ValidationError("uid", "User UID is required")
    if not email:
        raise ValidationError("email", "E-mail is required")
    if not device_id:
        raise ValidationError("deviceId", "Device ID is required")
    if not is_valid_email(email):
        raise ValidationError("email", "Invalid e-mail format")

    interval = _parse_interval(settings.get("interval"))
    if interval is None:
        raise ValidationError("interval", "Interval must be a positive whole number of seconds")

    return RunConfig(uid=uid, email=email, device_id=device_id, interval=interval, **run_options)
