"""Vault time helpers: age arithmetic, record date formats and the vault clock."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Union

from vtuos.utils.errors import InvalidOperationError

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def calculate_age(date_of_birth: DateLike, as_of: DateLike) -> int:
    """Whole years elapsed between a birth date and the as-of instant."""
    dob = _as_date(date_of_birth)
    ref = _as_date(as_of)
    years = ref.year - dob.year
    # Birthday not yet reached this year
    if (ref.month, ref.day) < (dob.month, dob.day):
        years -= 1
    return years


def is_adult(date_of_birth: DateLike, as_of: DateLike) -> bool:
    return calculate_age(date_of_birth, as_of) >= 18


def is_working_age(date_of_birth: DateLike, as_of: DateLike) -> bool:
    return 16 <= calculate_age(date_of_birth, as_of) <= 65


def format_date(value: DateLike) -> str:
    return value.strftime(DATE_FORMAT)


def format_datetime(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_iso8601(value: str) -> datetime:
    """Parse an RFC3339 timestamp, accepting the trailing 'Z' form."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VaultClock:
    """
    Simulated vault time.

    Vault time advances at ``time_scale`` times real time (1.0 = real time,
    60.0 = one real minute per vault hour). Time can only be moved by hand
    while the clock is paused.
    """

    def __init__(
        self,
        vault_start: datetime,
        time_scale: float = 1.0,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self._now = now or _utcnow
        self._start_real = self._now()
        self._start_vault = vault_start
        self._time_scale = time_scale
        self._paused = False
        self._paused_at = vault_start

    def now(self) -> datetime:
        if self._paused:
            return self._paused_at
        elapsed = self._now() - self._start_real
        return self._start_vault + timedelta(seconds=elapsed.total_seconds() * self._time_scale)

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def time_scale(self) -> float:
        return self._time_scale

    def pause(self) -> None:
        if not self._paused:
            self._paused_at = self.now()
            self._paused = True

    def resume(self) -> None:
        if self._paused:
            self._start_real = self._now()
            self._start_vault = self._paused_at
            self._paused = False

    def set_time_scale(self, scale: float) -> None:
        current = self.now()
        self._start_real = self._now()
        self._start_vault = current
        self._time_scale = scale
        if self._paused:
            self._paused_at = current

    def advance(self, delta: timedelta) -> None:
        if not self._paused:
            raise InvalidOperationError("cannot advance time while running; pause first")
        self._paused_at = self._paused_at + delta

    def set_time(self, value: datetime) -> None:
        if not self._paused:
            raise InvalidOperationError("cannot set time while running; pause first")
        self._paused_at = value
