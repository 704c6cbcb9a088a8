import pytest

from anagrams import anagrams as api
from anagrams.errors import InvalidArgument, NotFound


def test_element_limit():
    assert api.element_limit() == 10


def test_handle_lifecycle(tmp_path):
    path = tmp_path / "cat.anagram"
    handle = api.create(path, "cat")
    assert api.source_string(handle) == "cat"
    assert api.element_count(handle) == 3
    assert api.permutation_count(handle) == 0
    assert api.is_complete(handle) is False

    progress = []

    def keep_going(sequence, permutation):
        progress.append(permutation)
        return True

    api.generate(handle, keep_going)
    assert progress == ["atc", "cat", "cta", "tac", "tca"]
    assert api.permutation_count(handle) == 6
    assert api.is_complete(handle)
    api.test(handle)

    assert api.filter(handle, "ta") == 1
    assert api.term(handle) == "ta"
    assert api.count(handle) == 1
    assert api.string_at(handle, 0) == "tac"

    assert api.retain(handle) is handle
    api.release(handle)
    api.release(handle)
    with pytest.raises(InvalidArgument):
        api.count(handle)

    reopened = api.open(path)
    assert api.permutation_count(reopened) == 6
    assert api.count(reopened) == 6
    api.release(reopened)


@pytest.mark.parametrize(
    "operation, args",
    [
        (api.retain, ()),
        (api.release, ()),
        (api.source_string, ()),
        (api.element_count, ()),
        (api.permutation_count, ()),
        (api.generate, (None,)),
        (api.test, (None,)),
        (api.is_complete, ()),
        (api.filter, ("a",)),
        (api.term, ()),
        (api.count, ()),
        (api.string_at, (0,)),
    ],
)
def test_none_handle(operation, args):
    with pytest.raises(InvalidArgument):
        operation(None, *args)


def test_wrong_handle_type():
    with pytest.raises(InvalidArgument):
        api.count("cat")


def test_open_missing(tmp_path):
    with pytest.raises(NotFound):
        api.open(tmp_path / "nope.anagram")
