"""Record identifiers and vault registry numbers."""

from __future__ import annotations

import re
import threading
import uuid
from typing import Tuple

REGISTRY_PATTERN = re.compile(r"^V(\d{3})-(\d{5})$")


def new_id() -> str:
    return str(uuid.uuid4())


def is_valid_id(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def format_registry_number(vault_number: int, sequence: int) -> str:
    """Registry numbers look like V076-00001."""
    return f"V{vault_number:03d}-{sequence:05d}"


def parse_registry_number(value: str) -> Tuple[int, int]:
    """Split a registry number into (vault_number, sequence)."""
    match = REGISTRY_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"invalid registry number format: {value!r}")
    return int(match.group(1)), int(match.group(2))


class RegistryNumberGenerator:
    """Thread-safe sequential registry numbers for a single vault."""

    def __init__(self, vault_number: int, last_sequence: int = 0):
        self.vault_number = vault_number
        self._last = last_sequence
        self._lock = threading.Lock()

    def set_last_sequence(self, sequence: int) -> None:
        with self._lock:
            self._last = sequence

    def next(self) -> str:
        with self._lock:
            self._last += 1
            return format_registry_number(self.vault_number, self._last)
