"""
File-backed store of every distinct permutation of a string's codepoints.

An anagram file is a sequence of fixed-width records, the width being the
byte length of the UTF-8 source string:

    record 0     source string
    record 1     zero filled, reserved
    record 2     zero filled until generation completes, then the last
                 (descending) permutation
    record 3...  permutations in strictly increasing lexicographic order

Everything needed to resume an interrupted generation is in the file itself.
"""

import logging
import os
from contextlib import suppress
from typing import Iterator

from anagrams import utf8
from anagrams.antypes import PathInput, ProgressCallback, StringInput
from anagrams.config import DEFAULT_LIMITS, FILE_MINSIZE, RESERVED_RECORDS, Limits
from anagrams.errors import (
    Cancelled,
    CorruptStore,
    DuplicateDetected,
    InvalidArgument,
    NotReady,
)
from anagrams.permute import arrangement_count, next_permutation, sort_ascending
from anagrams.stream import CREATE, EXISTING, Stream

logger = logging.getLogger(__name__)


def _is_zero_filled(record: bytes) -> bool:
    return not any(record)


def _validate_source(source: StringInput, limits: Limits) -> tuple[bytes, int]:
    data = utf8.to_bytes(source)
    if 0 in data:
        raise InvalidArgument("source string contains a NUL character")
    elements, size = utf8.length(data)
    if elements < 0:
        raise InvalidArgument("source string is not valid UTF-8")
    if not 2 <= elements <= limits.elements:
        raise InvalidArgument(
            f"source must have 2 to {limits.elements} characters, "
            f"got {elements}"
        )
    if not 2 <= size <= limits.max_bytes:
        raise InvalidArgument(
            f"source must encode to 2 to {limits.max_bytes} bytes, got {size}"
        )
    # reject overlong forms: records are re-encoded canonically
    if utf8.encode_all(utf8.decode_all(data)) != data:
        raise InvalidArgument("source string is not canonical UTF-8")
    return data, elements


class Anagram:
    """
    Handle on an anagram file.

    Obtain one with :meth:`create` or :meth:`open`. Handles are shared with
    :meth:`retain` and given back with :meth:`release`; the backing file is
    closed by the last release. Not safe for concurrent use.
    """

    def __init__(
        self,
        stream: Stream,
        source: bytes,
        elements: int,
        limits: Limits,
        permutations: int = 0,
        complete: bool = False,
    ):
        self._stream = stream
        self._source = source
        self._elements = elements
        self._limits = limits
        self._permutations = permutations
        self._complete = complete
        self._base = 0
        self._count = permutations
        self._term = b""
        self._references = 1

    @classmethod
    def create(
        cls,
        path: PathInput,
        source: StringInput,
        limits: Limits = DEFAULT_LIMITS,
    ) -> "Anagram":
        data, elements = _validate_source(source, limits)
        stream = Stream.open(path, CREATE)
        try:
            stream.write(data)
            zeros = bytes(len(data))
            stream.write(zeros)
            stream.write(zeros)
            stream.flush()
        except Exception:
            stream.close()
            with suppress(OSError):
                os.unlink(stream.path)
            raise
        logger.debug(
            "created %s for %r (%d elements, %d bytes)",
            stream.path, utf8.to_text(data), elements, len(data)
        )
        return cls(stream, data, elements, limits)

    @classmethod
    def open(cls, path: PathInput, limits: Limits = DEFAULT_LIMITS) -> "Anagram":
        stream = Stream.open(path, EXISTING)
        try:
            store = cls._load(stream, limits)
        except CorruptStore as exc:
            logger.warning("rejected %s: %s", stream.path, exc)
            stream.close()
            raise
        except BaseException:
            stream.close()
            raise
        logger.debug(
            "opened %s: %d permutations%s",
            stream.path,
            store._permutations,
            ", complete" if store._complete else "",
        )
        return store

    @classmethod
    def _load(cls, stream: Stream, limits: Limits) -> "Anagram":
        header = stream.read(limits.max_bytes)
        if len(header) < FILE_MINSIZE:
            raise CorruptStore(f"file too short ({len(header)} bytes)")
        elements, width = utf8.length(header)
        if elements < 0:
            raise CorruptStore("source record is not valid UTF-8")
        if not 2 <= elements <= limits.elements or not 2 <= width <= limits.max_bytes:
            raise CorruptStore(
                f"source record out of bounds ({elements} elements, "
                f"{width} bytes)"
            )
        source = header[:width]
        records, remainder = divmod(stream.size(), width)
        if remainder != 0 or records < RESERVED_RECORDS:
            raise CorruptStore(
                f"file size is not a multiple of the {width}-byte record width"
                if remainder else f"file holds only {records} records"
            )
        permutations = records - RESERVED_RECORDS
        if permutations > arrangement_count(utf8.decode_all(source)):
            raise CorruptStore(
                f"{permutations} records exceed the possible arrangements"
            )
        stream.seek(width)
        reserved = stream.read(width)
        if len(reserved) != width or not _is_zero_filled(reserved):
            raise CorruptStore("reserved record is not zero filled")
        marker = stream.read(width)
        if len(marker) != width:
            raise CorruptStore("completion record is truncated")
        return cls(
            stream,
            source,
            elements,
            limits,
            permutations=permutations,
            complete=not _is_zero_filled(marker),
        )

    # -- shared ownership --------------------------------------------------

    def retain(self) -> "Anagram":
        self._check_open()
        self._references += 1
        return self

    def release(self) -> None:
        self._check_open()
        self._references -= 1
        if self._references == 0:
            self._stream.close()

    def __enter__(self) -> "Anagram":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def _check_open(self) -> None:
        if self._references < 1:
            raise InvalidArgument("anagram has been released")

    # -- accessors ---------------------------------------------------------

    @property
    def path(self) -> str:
        return self._stream.path

    @property
    def limits(self) -> Limits:
        return self._limits

    @property
    def references(self) -> int:
        return self._references

    @property
    def source_string(self) -> str:
        self._check_open()
        return utf8.to_text(self._source)

    @property
    def record_width(self) -> int:
        return len(self._source)

    @property
    def element_count(self) -> int:
        self._check_open()
        return self._elements

    @property
    def permutation_count(self) -> int:
        self._check_open()
        return self._permutations

    @property
    def is_complete(self) -> bool:
        self._check_open()
        return self._complete

    @property
    def term(self) -> str:
        self._check_open()
        return utf8.to_text(self._term)

    @property
    def count(self) -> int:
        self._check_open()
        return self._count

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[str]:
        for index in range(self.count):
            yield self.string_at(index)

    def __repr__(self) -> str:
        return (
            f"<Anagram {self.path!r} source={utf8.to_text(self._source)!r} "
            f"permutations={self._permutations} complete={self._complete}>"
        )

    # -- record access -----------------------------------------------------

    def _seek_record(self, record: int) -> None:
        self._stream.seek(record * self.record_width)

    def _read_record(self) -> bytes:
        record = self._stream.read(self.record_width)
        if len(record) != self.record_width:
            raise CorruptStore(
                f"short read: expected {self.record_width} bytes, "
                f"got {len(record)}"
            )
        return record

    def _write_record(self, record: bytes) -> None:
        self._stream.write(record)

    def _reset_result(self) -> None:
        self._base = 0
        self._count = self._permutations
        self._term = b""

    # -- operations --------------------------------------------------------

    def generate(
        self,
        callback: ProgressCallback | None = None,
        limit: int | None = None,
    ) -> None:
        """
        Write permutations to the backing file until all are stored.

        ``callback(sequence, permutation)`` runs after each permutation is
        appended; a falsy return stops generation, which a later call picks
        up where it left off. Passing ``limit`` stops the same way once that
        many new permutations are written. Returns immediately on a complete
        store.
        """
        self._check_open()
        if self._complete or (limit is not None and limit < 1):
            return
        width = self.record_width
        start = index = self._permutations
        if index < 1:
            index = 0
            current = self._source
        else:
            self._seek_record(index + RESERVED_RECORDS - 1)
            current = self._read_record()
        elements = utf8.decode_all(current)
        if len(elements) != self._elements or len(utf8.encode_all(elements)) != width:
            raise CorruptStore(
                f"permutation {index} does not match the source layout"
            )
        self._seek_record(index + RESERVED_RECORDS)
        if index == 0:
            sort_ascending(elements)
            self._write_record(utf8.encode_all(elements))
            index = self._permutations = 1
        cancelled = limit is not None and index - start >= limit
        while not cancelled and next_permutation(elements):
            record = utf8.encode_all(elements)
            self._write_record(record)
            index += 1
            self._permutations = index
            if callback is not None and not callback(index, utf8.to_text(record)):
                cancelled = True
            elif limit is not None and index - start >= limit:
                cancelled = True
        self._reset_result()
        if not cancelled:
            self._seek_record(2)
            self._write_record(utf8.encode_all(elements))
            self._complete = True
        self._stream.flush()
        if cancelled:
            logger.info("generation cancelled at %d permutations", index)
        else:
            logger.info("generation complete: %d permutations", index)

    def test(self, callback: ProgressCallback | None = None) -> None:
        """
        Check that no two stored permutations are identical.

        Compares every pair of records, so cost grows with the square of
        the permutation count. ``callback(index, permutation)`` runs after
        each comparison and a falsy return raises :class:`Cancelled`.
        """
        self._check_open()
        total = self._permutations
        if total < 2 or not self._complete:
            raise NotReady(
                "integrity test needs a complete anagram with at least "
                "2 permutations"
            )
        for i in range(total - 1):
            self._seek_record(i + RESERVED_RECORDS)
            first = self._read_record()
            for j in range(i + 1, total):
                second = self._read_record()
                if first == second:
                    raise DuplicateDetected(i, j)
                if callback is not None and not callback(j, utf8.to_text(second)):
                    raise Cancelled(f"integrity test cancelled at {i}:{j}")

    def string_at(self, index: int) -> str:
        self._check_open()
        if not 0 <= index < self._count:
            raise InvalidArgument(
                f"index {index} out of range for {self._count} results"
            )
        self._seek_record(self._base + index + RESERVED_RECORDS)
        return utf8.to_text(self._read_record())

    def filter(self, term: StringInput | None) -> int:
        """
        Select the permutations starting with ``term``.

        Output order is lexicographic, so matches form one contiguous run
        and scanning stops at its end. An empty or ``None`` term selects
        everything. Returns the number of selected permutations.
        """
        self._check_open()
        if not term:
            self._reset_result()
            return self._count
        data = utf8.to_bytes(term)
        elements, size = utf8.length(data)
        if not 1 <= elements <= self._elements:
            self._base = 0
            self._count = 0
            self._term = b""
            return 0
        prefix = data[:size]
        base, count = 0, 0
        self._seek_record(RESERVED_RECORDS)
        for i in range(self._permutations):
            if self._read_record().startswith(prefix):
                if count == 0:
                    base = i
                count += 1
            elif count != 0:
                break
        self._base = base
        self._count = count
        self._term = prefix
        return count
