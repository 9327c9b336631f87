"""Binary input configurations packed into integers.

Cell ``k`` of a configuration is bit ``k`` of its ``code``. Text renderings
list cells left to right starting with cell 0, so ``"110"`` is code ``0b011``.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from density_ca.config.constants import MAX_SUPPORTED_LEN


@dataclass(frozen=True, order=True)
class Configuration:
    """An immutable binary string of length ``length``."""

    length: int
    code: int

    def __post_init__(self) -> None:
        if self.length < 0 or self.length > MAX_SUPPORTED_LEN:
            raise ValueError(f"length must be in [0, {MAX_SUPPORTED_LEN}]")
        if self.code < 0 or self.code >> self.length:
            raise ValueError(f"code {self.code} has bits beyond length {self.length}")

    @classmethod
    def from_string(cls, pattern: str) -> Configuration:
        """Parse a ``0``/``1`` string (cell 0 first)."""
        pattern = pattern.strip()
        if any(ch not in "01" for ch in pattern):
            raise ValueError(f"pattern must contain only 0 and 1, got {pattern!r}")
        code = 0
        for index, ch in enumerate(pattern):
            if ch == "1":
                code |= 1 << index
        return cls(length=len(pattern), code=code)

    @classmethod
    def from_bits(cls, bits: list[int] | tuple[int, ...]) -> Configuration:
        return cls.from_string("".join("1" if bit else "0" for bit in bits))

    def bits(self) -> tuple[int, ...]:
        """Cell values in order, cell 0 first."""
        return tuple((self.code >> index) & 1 for index in range(self.length))

    def ones(self) -> int:
        return bin(self.code).count("1")

    def zeros(self) -> int:
        return self.length - self.ones()

    def __str__(self) -> str:
        return "".join(str(bit) for bit in self.bits())


def random_configuration(length: int, rng: Random) -> Configuration:
    """Draw a uniformly random configuration of ``length`` cells."""
    if length < 1:
        raise ValueError("length must be >= 1")
    return Configuration(length=length, code=rng.getrandbits(length))
