class AnagramError(Exception):
    """Base class for every failure raised by the anagrams package."""


class InvalidArgument(AnagramError, ValueError):
    pass


class NotFound(AnagramError, FileNotFoundError):
    pass


class IOFailure(AnagramError, OSError):
    pass


class CorruptStore(AnagramError):
    pass


class DecodeFailure(AnagramError, ValueError):
    pass


class NotReady(AnagramError):
    pass


class DuplicateDetected(AnagramError):
    def __init__(self, first: int, second: int):
        super().__init__(
            f"permutations {first} and {second} are identical"
        )
        self.first = first
        self.second = second


class Cancelled(AnagramError):
    pass
