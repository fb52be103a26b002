"""
Value types: RunConfig, AccountSnapshot, CycleOutcome.

All are frozen dataclasses — produced once, compared across time, never
mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .constants import SETTLE_DELAY_SEC
from .errors import DecodeError


@dataclass(frozen=True)
class RunConfig:
    uid: str
    email: str
    device_id: str
    interval: int                      # Polling period, seconds
    settle_delay: float = SETTLE_DELAY_SEC
    allow_overlap: bool = True         # Ticks may start while a cycle is in flight


def _as_int(data, key, default):
    """Integral count from the body; numeric strings ("150") and 150.0 are accepted."""
    value = data.get(key, default)
    if isinstance(value, str):
        value = value.strip() or None
    if value is None:
        return default
    if isinstance(value, bool):
        raise DecodeError(f"Field '{key}' is not numeric: {value!r}")
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise DecodeError(f"Field '{key}' is not numeric: {value!r}") from None
    if not number.is_integer():
        raise DecodeError(f"Field '{key}' is not a whole number: {value!r}")
    return int(number)


@dataclass(frozen=True)
class AccountSnapshot:
    uid: str
    email: str
    points: Optional[int]
    total_games: int = 0
    invite_code: Optional[str] = None
    total_referrals: int = 0

    @classmethod
    def from_json(cls, data):
        """Build a snapshot from the /api/getUser JSON body."""
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        invite = data.get("codeInvite")
        return cls(
            uid=str(data.get("uid") or ""),
            email=str(data.get("email") or ""),
            points=_as_int(data, "point", None),
            total_games=_as_int(data, "totalGame", 0),
            invite_code=str(invite) if invite else None,
            total_referrals=_as_int(data, "totalReferral", 0),
        )


class CycleStage(str, Enum):
    FETCH_BEFORE = "fetch-before"
    MUTATE = "mutate"
    FETCH_AFTER = "fetch-after"


@dataclass(frozen=True)
class CycleSuccess:
    before: Optional[AccountSnapshot]
    after: Optional[AccountSnapshot]
    delta: int


@dataclass(frozen=True)
class CycleFailure:
    stage: CycleStage
    error_kind: str                    # Exception class name, e.g. "NetworkError"
    message: str
    before: Optional[AccountSnapshot] = None   # Only set for FETCH_AFTER


CycleOutcome = Union[CycleSuccess, CycleFailure]
