from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MEMORY_SIZE = 30000
# pc and memory pointer wrap like a 64-bit machine word
DEFAULT_WORD_BITS = 64


@dataclass(frozen=True)
class RuntimeOptions:
    memory_size: int = DEFAULT_MEMORY_SIZE
    word_bits: int = DEFAULT_WORD_BITS

    def __post_init__(self) -> None:
        if self.memory_size < 1:
            raise ValueError(f"memory_size must be positive, got {self.memory_size}")
        if self.word_bits < 1:
            raise ValueError(f"word_bits must be positive, got {self.word_bits}")
        if self.memory_size > self.word_modulus:
            raise ValueError(
                f"memory_size {self.memory_size} is not addressable with {self.word_bits}-bit pointers"
            )

    @property
    def word_modulus(self) -> int:
        return 1 << self.word_bits
