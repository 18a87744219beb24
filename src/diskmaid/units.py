"""Display units for byte sizes."""

from __future__ import annotations

from enum import Enum


class Unit(str, Enum):
    """Binary size unit used when rendering sizes."""

    KB = "KB"
    MB = "MB"
    GB = "GB"

    @property
    def divisor(self) -> int:
        return _DIVISORS[self]

    def convert(self, size: int) -> float:
        """Return ``size`` bytes expressed in this unit."""
        return size / self.divisor

    @classmethod
    def parse(cls, text: str) -> Unit:
        """Parse a unit name case-insensitively.

        Raises:
            ValueError: If ``text`` names no known unit.
        """
        try:
            return cls(text.strip().upper())
        except ValueError:
            known = ", ".join(u.value for u in cls)
            raise ValueError(f"Unknown unit '{text}'. Known units: {known}") from None

    def __str__(self) -> str:
        return self.value


_DIVISORS: dict[Unit, int] = {
    Unit.KB: 1024,
    Unit.MB: 1024**2,
    Unit.GB: 1024**3,
}

DEFAULT_UNIT = Unit.MB


def format_size(size: int, unit: Unit) -> str:
    """Render ``size`` bytes with two decimals, e.g. ``0.00 MB``."""
    return f"{unit.convert(size):.2f} {unit}"
