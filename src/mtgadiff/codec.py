#!/usr/bin/env python3

"""Patch file encoding and decoding"""

import ctypes
import io
from typing import BinaryIO, Callable

from mtgadiff.config import DEFAULT_FORMAT, MAGIC_SIZE, PatchFormat
from mtgadiff.errors import (
    IOFailureError,
    MalformedFormatError,
    TruncatedDataError,
    UnsupportedVersionError,
)
from mtgadiff.patch import CHECKSUM_SIZE, PatchItem, PatchSet
from mtgadiff.util.ctypes import bytes_to_uint8


class PatchHeader(ctypes.BigEndianStructure):
    class BufferValidation(ctypes.BigEndianStructure):
        _fields_ = [
            ("length", ctypes.c_uint32),
            ("checksum", CHECKSUM_SIZE * ctypes.c_uint8),
        ]
        _pack_ = 1

    _fields_ = [
        ("magic", MAGIC_SIZE * ctypes.c_uint8),
        ("version_major", ctypes.c_uint8),
        ("version_minor", ctypes.c_uint8),
        ("original", BufferValidation),
        ("patched", BufferValidation),
        ("item_count", ctypes.c_uint32),
    ]
    _pack_ = 1


class ItemHeader(ctypes.BigEndianStructure):
    _fields_ = [
        ("offset", ctypes.c_uint32),
        ("length", ctypes.c_uint32),
    ]
    _pack_ = 1


class PatchCodec:
    """
    Serializes PatchSet instances to the binary patch format.

    Layout (big-endian):
        magic[8] | major | minor | original len, sha256 | patched len, sha256 |
        item count | count * (offset | content len | content)
    """

    HEADER_SIZE = ctypes.sizeof(PatchHeader)
    ITEM_HEADER_SIZE = ctypes.sizeof(ItemHeader)
    # Upper bound on a single read, stops huge declared lengths allocating up front
    READ_CHUNK = 64 * 1024

    def __init__(self, fmt: PatchFormat = DEFAULT_FORMAT):
        self.fmt = fmt

    def encode(self, patch: PatchSet) -> bytes:
        """Serialize a patch to bytes"""
        output = io.BytesIO()
        self.write(patch, output)
        return output.getvalue()

    def decode(self, data: bytes) -> PatchSet:
        """Deserialize a patch from bytes"""
        return self.read(io.BytesIO(data))

    def _header(self, patch: PatchSet) -> PatchHeader:
        return PatchHeader(
            bytes_to_uint8(self.fmt.magic),
            self.fmt.version_major,
            self.fmt.version_minor,
            PatchHeader.BufferValidation(patch.original_length, bytes_to_uint8(patch.original_checksum)),
            PatchHeader.BufferValidation(patch.patched_length, bytes_to_uint8(patch.patched_checksum)),
            len(patch.items),
        )

    @staticmethod
    def _write_all(stream: BinaryIO, data: bytes):
        view = memoryview(data)
        try:
            while len(view) > 0:
                written = stream.write(view)
                if written is None:
                    raise IOFailureError("Patch sink would block")
                view = view[written:]
        except OSError as e:
            raise IOFailureError(f"Failed to write patch data: {e}") from e

    def write(self, patch: PatchSet, stream: BinaryIO):
        """
        Write a patch to a binary stream

        Raises:
            IOFailureError: The stream failed to accept the data
        """
        self._write_all(stream, bytes(self._header(patch)))
        for item in patch.items:
            self._write_all(stream, bytes(ItemHeader(item.offset, len(item.content))))
            self._write_all(stream, item.content)

    @classmethod
    def _read_exact(cls, stream: BinaryIO, size: int, field: str) -> bytes:
        """Read exactly size bytes, a short read is never treated as success"""
        data = bytearray()
        while len(data) < size:
            try:
                chunk = stream.read(min(size - len(data), cls.READ_CHUNK))
            except OSError as e:
                raise IOFailureError(f"Failed to read {field}: {e}") from e
            if not chunk:
                raise TruncatedDataError(f"Patch data ended while reading {field} ({len(data)} of {size} bytes)")
            data += chunk
        return bytes(data)

    def read(
        self,
        stream: BinaryIO,
        progress_cb: Callable[[int, int], None] | None = None,
    ) -> PatchSet:
        """
        Read a patch from a binary stream

        Args:
            stream: Binary source positioned at the start of the patch
            progress_cb: Called with (items read, item count) after each item

        Raises:
            MalformedFormatError: Magic identifier mismatch or invalid item
            UnsupportedVersionError: Version is not exactly the supported version
            TruncatedDataError: Stream ended before the patch was complete
            IOFailureError: The stream failed
        """
        magic = self._read_exact(stream, MAGIC_SIZE, "magic identifier")
        if magic != self.fmt.magic:
            raise MalformedFormatError(f"Invalid patch file format (magic {magic.hex()} != {self.fmt.magic.hex()})")

        version = self._read_exact(stream, 2, "version")
        if (version[0], version[1]) != self.fmt.version:
            raise UnsupportedVersionError(
                f"Unsupported patch version ({version[0]}.{version[1]} != "
                f"{self.fmt.version_major}.{self.fmt.version_minor})"
            )

        remainder = self._read_exact(stream, self.HEADER_SIZE - MAGIC_SIZE - 2, "header")
        hdr = PatchHeader.from_buffer_copy(magic + version + remainder)

        items = []
        for idx in range(hdr.item_count):
            item_bin = self._read_exact(stream, self.ITEM_HEADER_SIZE, f"item {idx} header")
            item_hdr = ItemHeader.from_buffer_copy(item_bin)
            if item_hdr.length == 0:
                raise MalformedFormatError(f"Item {idx} at offset {item_hdr.offset:08x} has no content")
            content = self._read_exact(stream, item_hdr.length, f"item {idx} content")
            items.append(PatchItem(item_hdr.offset, content))
            if progress_cb is not None:
                progress_cb(idx + 1, hdr.item_count)

        return PatchSet(
            hdr.original.length,
            bytes(hdr.original.checksum),
            hdr.patched.length,
            bytes(hdr.patched.checksum),
            items,
        )
