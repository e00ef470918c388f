"""Duration model: a (minutes, seconds) pair counted down in place."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidInput


@dataclass
class Duration:
    minutes: int
    seconds: int

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    @property
    def is_zero(self) -> bool:
        return self.total_seconds == 0

    def copy(self) -> Duration:
        return Duration(self.minutes, self.seconds)

    def format(self) -> str:
        """``MM:SS``, both fields zero-padded; minutes may exceed two digits."""
        return f"{self.minutes:02d}:{self.seconds:02d}"

    def __str__(self) -> str:
        return self.format()


def normalize(seconds: int | None = None, minutes: int | None = None) -> Duration:
    """Build a Duration from exactly one of *seconds* or *minutes*.

    >>> normalize(125)
    Duration(minutes=2, seconds=5)
    >>> normalize(minutes=2)
    Duration(minutes=2, seconds=0)
    """
    if seconds is None and minutes is None:
        raise InvalidInput("informe o tempo em segundos ou em minutos")
    if seconds is not None and minutes is not None:
        raise InvalidInput("informe segundos ou minutos, não ambos")

    total = minutes * 60 if minutes is not None else seconds
    if total < 0:
        raise InvalidInput(f"o tempo não pode ser negativo: {total}s")
    return Duration(minutes=total // 60, seconds=total % 60)
