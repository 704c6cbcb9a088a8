"""
Positional byte stream over a binary file.

Thin wrapper around a buffered file object which translates OS errors into
the package's exception types and makes ``flush`` durable.
"""

import logging
import os
from typing import BinaryIO

from anagrams.antypes import PathInput
from anagrams.errors import IOFailure, NotFound

logger = logging.getLogger(__name__)

CREATE = "w+b"
EXISTING = "r+b"


class Stream:
    def __init__(self, handle: BinaryIO, path: str):
        self._handle = handle
        self.path = path

    @classmethod
    def open(cls, path: PathInput, mode: str) -> "Stream":
        if mode not in (CREATE, EXISTING):
            raise ValueError(f"unsupported stream mode {mode!r}")
        path = os.fspath(path)
        try:
            handle = open(path, mode)
        except FileNotFoundError as exc:
            raise NotFound(f"no such file: {path}") from exc
        except OSError as exc:
            raise IOFailure(f"cannot open {path}: {exc}") from exc
        logger.debug("opened %s (%s)", path, mode)
        return cls(handle, path)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def read(self, size: int) -> bytes:
        try:
            return self._handle.read(size)
        except OSError as exc:
            raise IOFailure(f"read failed on {self.path}: {exc}") from exc

    def write(self, data: bytes) -> int:
        try:
            return self._handle.write(data)
        except OSError as exc:
            raise IOFailure(f"write failed on {self.path}: {exc}") from exc

    def seek(self, offset: int) -> None:
        try:
            self._handle.seek(offset, os.SEEK_SET)
        except OSError as exc:
            raise IOFailure(f"seek failed on {self.path}: {exc}") from exc

    def size(self) -> int:
        try:
            return self._handle.seek(0, os.SEEK_END)
        except OSError as exc:
            raise IOFailure(f"seek failed on {self.path}: {exc}") from exc

    def flush(self) -> None:
        try:
            self._handle.flush()
            os.fsync(self._handle.fileno())
        except OSError as exc:
            raise IOFailure(f"sync failed on {self.path}: {exc}") from exc

    def close(self) -> None:
        if self._handle.closed:
            return
        try:
            self._handle.close()
        except OSError as exc:
            raise IOFailure(f"close failed on {self.path}: {exc}") from exc
        logger.debug("closed %s", self.path)
