from dataclasses import dataclass

# leading records: source, reserved, completion marker
RESERVED_RECORDS = 3
# three records of two bytes each
FILE_MINSIZE = 6


@dataclass(frozen=True)
class Limits:
    """Element and buffer bounds for an anagram file.

    ``size`` counts up to four bytes per element plus a terminator, so the
    longest storable source string is ``size - 1`` bytes.
    """
    elements: int
    size: int

    @property
    def max_bytes(self) -> int:
        return self.size - 1


# 10 elements allow up to 3,628,800 permutations
DEFAULT_LIMITS = Limits(elements=10, size=41)
# 16-bit integer platforms: up to 5040 permutations
LEGACY_LIMITS = Limits(elements=7, size=29)
