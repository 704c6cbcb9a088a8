from functools import wraps
from typing import Callable, TypeVar

from anagrams.anagrams_core import Anagram
from anagrams.antypes import PathInput, ProgressCallback, StringInput
from anagrams.config import DEFAULT_LIMITS
from anagrams.errors import InvalidArgument

R = TypeVar('R')


def _handle_op(func: Callable[..., R]) -> Callable[..., R]:
    @wraps(func)
    def checked(handle: Anagram | None, *args, **kwargs) -> R:
        if handle is None:
            raise InvalidArgument("anagram handle is None")
        if not isinstance(handle, Anagram):
            raise InvalidArgument(
                f"expected an Anagram handle, got {type(handle).__name__}"
            )
        return func(handle, *args, **kwargs)
    return checked


def element_limit() -> int:
    return DEFAULT_LIMITS.elements


def create(path: PathInput, source: StringInput) -> Anagram:
    return Anagram.create(path, source)


def open(path: PathInput) -> Anagram:
    return Anagram.open(path)


@_handle_op
def retain(handle: Anagram) -> Anagram:
    return handle.retain()


@_handle_op
def release(handle: Anagram) -> None:
    handle.release()


@_handle_op
def source_string(handle: Anagram) -> str:
    return handle.source_string


@_handle_op
def element_count(handle: Anagram) -> int:
    return handle.element_count


@_handle_op
def permutation_count(handle: Anagram) -> int:
    return handle.permutation_count


@_handle_op
def generate(handle: Anagram, callback: ProgressCallback | None = None) -> None:
    handle.generate(callback)


@_handle_op
def test(handle: Anagram, callback: ProgressCallback | None = None) -> None:
    handle.test(callback)


@_handle_op
def is_complete(handle: Anagram) -> bool:
    return handle.is_complete


@_handle_op
def filter(handle: Anagram, term: StringInput | None) -> int:
    return handle.filter(term)


@_handle_op
def term(handle: Anagram) -> str:
    return handle.term


@_handle_op
def count(handle: Anagram) -> int:
    return handle.count


@_handle_op
def string_at(handle: Anagram, index: int) -> str:
    return handle.string_at(index)
