import itertools
import random

import pytest

from anagrams.permute import (
    arrangement_count, lexpermute, lexperms, next_permutation, sort_ascending
)


@pytest.mark.parametrize("func", (lexperms, lexpermute))
def test_lp_1(func):
    obj = (1, 4, 2, 2)
    res = tuple(func(obj))
    assert len(res) == 12
    # order is defined here, unlike a set of multiset permutations
    assert res == tuple(sorted(set(itertools.permutations(obj))))
    assert res[0] == (1, 2, 2, 4)
    assert res[-1] == (4, 2, 2, 1)


@pytest.mark.parametrize("func", (lexperms, lexpermute))
def test_lp_strictly_increasing(func):
    obj = tuple(random.randint(-3, 3) for _ in range(6))
    res = tuple(func(obj))
    assert all(a < b for a, b in itertools.pairwise(res))
    assert len(res) == arrangement_count(obj)


@pytest.mark.parametrize("func", (lexperms, lexpermute))
def test_lp_strings(func):
    res = tuple("".join(p) for p in func("cat"))
    assert res == ("act", "atc", "cat", "cta", "tac", "tca")


@pytest.mark.parametrize("func", (lexperms, lexpermute))
def test_lp_not_iterable(func):
    with pytest.raises(TypeError):
        tuple(func(12))


def test_lexperms_iteration():
    obj = (1, 4, 2, 2)
    gen = lexperms(obj)
    res = [next(gen)]
    assert len(res[0]) == 4
    for _ in range(11):
        res.append(next(gen))
    try:
        next(gen)
        raise RuntimeError("Should have raised StopIteration")
    except StopIteration:
        pass


@pytest.mark.parametrize(
    "elements, expected",
    [
        ("cat", 6),
        ("aab", 3),
        ("aaaa", 1),
        ("mississippi"[:10], 12600),
        (list(range(10)), 3628800),
    ],
)
def test_arrangement_count(elements, expected):
    assert arrangement_count(elements) == expected


def test_sort_ascending_in_place():
    elements = [0x74, 0x61, 0x63, 0x61]
    sort_ascending(elements)
    assert elements == [0x61, 0x61, 0x63, 0x74]


def test_sort_ascending_short():
    for elements in ([], [5]):
        copy = list(elements)
        sort_ascending(copy)
        assert copy == elements


def test_next_permutation_last_is_untouched():
    elements = [3, 2, 2, 1]
    assert next_permutation(elements) is False
    assert elements == [3, 2, 2, 1]


def test_next_permutation_walk():
    elements = [1, 2, 3]
    seen = [tuple(elements)]
    while next_permutation(elements):
        seen.append(tuple(elements))
    assert seen == sorted(itertools.permutations([1, 2, 3]))


def test_next_permutation_skips_duplicates():
    elements = [ord(c) for c in "aab"]
    seen = ["aab"]
    while next_permutation(elements):
        seen.append("".join(map(chr, elements)))
    assert seen == ["aab", "aba", "baa"]
