"""Fixed-size bit set stored in 64-bit words."""

from __future__ import annotations

_WORD_BITS = 64


class BitSet:
    """A bit set of ``size`` bits, backed by ``ceil(size / 64)`` words."""

    __slots__ = ("_size", "_words", "_mask", "_value")

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._size = size
        self._words = -(-size // _WORD_BITS)
        self._mask = (1 << (self._words * _WORD_BITS)) - 1
        self._value = 0

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"BitSet({self._size}, {self.to_string()!r})"

    def _check_compatible(self, other: BitSet) -> None:
        if not isinstance(other, BitSet):
            raise TypeError("operand must be a BitSet")
        if self._words != other._words:
            raise ValueError("bit sets have different word sizes")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"bit index {index} out of range for size {self._size}")

    def copy(self) -> BitSet:
        """Return an independent copy."""
        other = BitSet(self._size)
        other._value = self._value
        return other

    def __iand__(self, other: BitSet) -> BitSet:
        self._check_compatible(other)
        self._value &= other._value
        return self

    def __ior__(self, other: BitSet) -> BitSet:
        self._check_compatible(other)
        self._value |= other._value
        return self

    def __and__(self, other: BitSet) -> BitSet:
        result = self.copy()
        result &= other
        return result

    def __or__(self, other: BitSet) -> BitSet:
        result = self.copy()
        result |= other
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        self._check_compatible(other)
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def check_set_flags(self, cond: BitSet) -> bool:
        """Return True if every bit set in ``cond`` is set here."""
        self._check_compatible(cond)
        return self._value & cond._value == cond._value

    def check_unset_flags(self, cond: BitSet) -> bool:
        """Return True if every bit set in ``cond`` is unset here."""
        self._check_compatible(cond)
        return self._value & cond._value == 0

    def shift_right(self) -> None:
        """Move every bit one position towards higher indices."""
        self._value = (self._value << 1) & self._mask

    def set(self, index: int, value: bool = True) -> None:
        """Set or clear the bit at ``index``."""
        self._check_index(index)
        if value:
            self._value |= 1 << index
        else:
            self._value &= ~(1 << index)

    def get(self, index: int) -> bool:
        """Return the bit at ``index``."""
        self._check_index(index)
        return bool(self._value >> index & 1)

    def to_string(self) -> str:
        """Return the bits as '0'/'1' characters, lowest index first."""
        return "".join("1" if self._value >> i & 1 else "0" for i in range(self._size))

    def set_bits_indices(self) -> list[int]:
        """Return the indices of all set bits in ascending order."""
        indices = []
        value = self._value
        while value:
            low = value & -value
            indices.append(low.bit_length() - 1)
            value ^= low
        return indices