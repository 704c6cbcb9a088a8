from anagrams.anagrams_core import Anagram
from anagrams.config import DEFAULT_LIMITS, LEGACY_LIMITS, Limits
from anagrams.errors import (
    AnagramError, Cancelled, CorruptStore, DecodeFailure, DuplicateDetected,
    InvalidArgument, IOFailure, NotFound, NotReady
)
from anagrams.permute import (
    arrangement_count, lexpermute, lexperms, next_permutation, sort_ascending
)

__version__ = "0.1.0"
