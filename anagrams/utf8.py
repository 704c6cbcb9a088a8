"""
Codepoint-level UTF-8 codec.

Strings are handled as raw bytes terminated by a zero byte or by the end of
the buffer, whichever comes first. Codepoint 0 therefore doubles as the
end-of-string marker: ``decode`` returns it without advancing and ``encode``
writes nothing for it.
"""

from typing import Iterable

from anagrams.errors import DecodeFailure, InvalidArgument

MAX_CODEPOINT = 0x10FFFF


def _byte_at(data: bytes, index: int) -> int:
    if index < len(data):
        return data[index]
    return 0


def _sequence_tail(lead: int) -> tuple[int, int] | None:
    """Return (payload bits, continuation byte count) for a leading byte."""
    if lead < 0x80:
        return lead, 0
    if lead & 0xE0 == 0xC0:
        return lead & 0x1F, 1
    if lead & 0xF0 == 0xE0:
        return lead & 0x0F, 2
    if lead & 0xF8 == 0xF0:
        return lead & 0x07, 3
    return None


def decode(data: bytes, offset: int) -> tuple[int, int]:
    """
    Decode the codepoint starting at ``offset``.

    Returns the codepoint and the offset just past it. A zero codepoint is
    returned with the offset unchanged. Raises DecodeFailure on a malformed
    leading or continuation byte.
    """
    if offset < 0:
        raise DecodeFailure(f"negative offset {offset}")
    i = offset
    tail = _sequence_tail(_byte_at(data, i))
    if tail is None:
        raise DecodeFailure(
            f"invalid leading byte 0x{data[i]:02X} at offset {i}"
        )
    code, remaining = tail
    i += 1
    while remaining > 0:
        byte = _byte_at(data, i)
        if byte & 0xC0 != 0x80:
            raise DecodeFailure(
                f"invalid continuation byte 0x{byte:02X} at offset {i}"
            )
        code = (code << 6) | (byte & 0x3F)
        i += 1
        remaining -= 1
    if code == 0:
        return 0, offset
    return code, i


def encode(buffer: bytearray, offset: int, codepoint: int) -> int:
    """
    Write ``codepoint`` into ``buffer`` at ``offset``; return the new offset.

    Codepoints below 1 are skipped and leave the offset untouched.
    """
    if codepoint < 1:
        return offset
    if codepoint > MAX_CODEPOINT:
        raise InvalidArgument(f"codepoint 0x{codepoint:X} out of range")
    if codepoint < 0x80:
        encoded = (codepoint,)
    elif codepoint < 0x800:
        encoded = (
            0xC0 | (codepoint >> 6),
            0x80 | (codepoint & 0x3F),
        )
    elif codepoint < 0x10000:
        encoded = (
            0xE0 | (codepoint >> 12),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        )
    else:
        encoded = (
            0xF0 | (codepoint >> 18),
            0x80 | ((codepoint >> 12) & 0x3F),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        )
    end = offset + len(encoded)
    buffer[offset:end] = bytes(encoded)
    return end


def length(data: bytes) -> tuple[int, int]:
    """
    Count the codepoints and bytes of ``data`` up to its terminator.

    Returns ``(-1, 0)`` if ``data`` holds a malformed sequence.
    """
    count, offset = 0, 0
    try:
        while True:
            code, offset = decode(data, offset)
            if code == 0:
                break
            count += 1
    except DecodeFailure:
        return -1, 0
    return count, offset


def decode_all(data: bytes) -> list[int]:
    codepoints = []
    offset = 0
    while True:
        code, offset = decode(data, offset)
        if code == 0:
            return codepoints
        codepoints.append(code)


def encode_all(codepoints: Iterable[int]) -> bytes:
    buffer = bytearray()
    offset = 0
    for code in codepoints:
        offset = encode(buffer, offset, code)
    return bytes(buffer)


def to_bytes(string: str | bytes) -> bytes:
    # surrogatepass keeps validation in this module rather than in str.encode
    if isinstance(string, str):
        return string.encode("utf-8", "surrogatepass")
    if isinstance(string, (bytes, bytearray)):
        return bytes(string)
    raise InvalidArgument(
        f"expected str or bytes, got {type(string).__name__}"
    )


def to_text(data: bytes) -> str:
    try:
        return data.decode("utf-8", "surrogatepass")
    except UnicodeDecodeError as exc:
        raise DecodeFailure(
            f"invalid UTF-8 at offset {exc.start} of {bytes(data)!r}"
        ) from exc
