from collections import Counter
from math import factorial
from typing import Collection, Iterator, MutableSequence

from anagrams.antypes import OrderedT


def sort_ascending(elements: MutableSequence[OrderedT]) -> None:
    """In-place exchange sort. Stable, and cheap enough for ten elements."""
    last = len(elements) - 1
    swapped = last > 0
    while swapped:
        swapped = False
        for i in range(last):
            if elements[i + 1] < elements[i]:
                elements[i], elements[i + 1] = elements[i + 1], elements[i]
                swapped = True


def next_permutation(elements: MutableSequence[OrderedT]) -> bool:
    """
    Rearrange ``elements`` into their lexicographic successor, in place.

    Returns False and leaves ``elements`` untouched when they are already in
    descending order, i.e. the current arrangement is the last one. Equal
    elements never produce the same arrangement twice.
    """
    key = len(elements) - 1
    # the suffix from key onward is the longest non-increasing tail
    while key > 0 and not elements[key - 1] < elements[key]:
        key -= 1
    key -= 1
    if key < 0:
        return False
    pivot = elements[key]
    swap = len(elements) - 1
    while not pivot < elements[swap]:
        swap -= 1
    elements[key], elements[swap] = elements[swap], pivot
    lo, hi = key + 1, len(elements) - 1
    while lo < hi:
        elements[lo], elements[hi] = elements[hi], elements[lo]
        lo += 1
        hi -= 1
    return True


def arrangement_count(elements: Collection[OrderedT]) -> int:
    """n! / prod(multiplicity!) -- the number of distinct arrangements."""
    total = factorial(len(elements))
    for multiplicity in Counter(elements).values():
        total //= factorial(multiplicity)
    return total


def lexperms(elements: Collection[OrderedT]) -> Iterator[tuple[OrderedT, ...]]:
    try:
        state = list(elements)
    except (TypeError, ValueError):
        raise TypeError("Elements must be iterable")
    return _lexperms(state)


def _lexperms(state: list) -> Iterator[tuple]:
    sort_ascending(state)
    yield tuple(state)
    while next_permutation(state):
        yield tuple(state)


def lexpermute(
    elements: Collection[OrderedT]
) -> tuple[tuple[OrderedT, ...], ...]:
    return tuple(lexperms(elements))
