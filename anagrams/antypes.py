from os import PathLike
from typing import Callable, Protocol, TypeAlias, TypeVar

T = TypeVar('T')


class SupportsOrder(Protocol):
    def __lt__(self: T, other: T) -> bool:
        pass

    def __eq__(self: T, other: T) -> bool:
        pass


OrderedT = TypeVar('OrderedT', bound=SupportsOrder)

StringInput: TypeAlias = str | bytes
PathInput: TypeAlias = str | PathLike[str]

# (sequence number, permutation) -> keep going?
ProgressCallback: TypeAlias = Callable[[int, str], bool]
