#!/usr/bin/env python3

"""Patch data model"""

import hashlib

from attrs import define as _attrs_define
from attrs import field as _attrs_field

UINT32_MAX = 0xFFFFFFFF
CHECKSUM_SIZE = 32


def checksum(data: bytes) -> bytes:
    """SHA-256 digest of a buffer"""
    return hashlib.sha256(data).digest()


def _uint32(_instance, attribute, value):
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{attribute.name} must be an int (got {type(value).__name__})")
    if not 0 <= value <= UINT32_MAX:
        raise ValueError(f"{attribute.name} does not fit in uint32 ({value})")


def _digest(_instance, attribute, value):
    if not isinstance(value, bytes):
        raise TypeError(f"{attribute.name} must be bytes (got {type(value).__name__})")
    if len(value) != CHECKSUM_SIZE:
        raise ValueError(f"{attribute.name} must be {CHECKSUM_SIZE} bytes (got {len(value)})")


def _content(_instance, attribute, value):
    if not isinstance(value, bytes):
        raise TypeError(f"{attribute.name} must be bytes (got {type(value).__name__})")
    if len(value) == 0:
        raise ValueError(f"{attribute.name} must not be empty")


def _items(_instance, attribute, value):
    for item in value:
        if not isinstance(item, PatchItem):
            raise TypeError(f"{attribute.name} must only contain PatchItem (got {type(item).__name__})")


@_attrs_define(frozen=True)
class PatchItem:
    """
    Contiguous replacement region

    Attributes:
        offset (int): Position in the patched buffer where content is written
        content (bytes): Bytes to write starting at offset
    """

    offset: int = _attrs_field(validator=_uint32)
    content: bytes = _attrs_field(validator=_content)

    @property
    def end(self) -> int:
        return self.offset + len(self.content)

    @property
    def preview(self) -> str:
        """Hex of the first 16 content bytes"""
        if len(self.content) <= 16:
            return self.content.hex()
        return f"{self.content[:16].hex()}..."


@_attrs_define(frozen=True)
class PatchSet:
    """
    Complete, self-verifying delta between two buffers

    Items are kept in the order they were produced, which is ascending
    offset for patches generated by DiffEngine.

    Attributes:
        original_length (int): Length of the buffer the patch applies to
        original_checksum (bytes): SHA-256 of the buffer the patch applies to
        patched_length (int): Length of the reconstructed buffer
        patched_checksum (bytes): SHA-256 of the reconstructed buffer
        items (tuple[PatchItem, ...]): Replacement regions, in stored order
    """

    original_length: int = _attrs_field(validator=_uint32)
    original_checksum: bytes = _attrs_field(validator=_digest)
    patched_length: int = _attrs_field(validator=_uint32)
    patched_checksum: bytes = _attrs_field(validator=_digest)
    items: tuple[PatchItem, ...] = _attrs_field(default=(), converter=tuple, validator=_items)

    @property
    def content_length(self) -> int:
        """Total number of content bytes across all items"""
        return sum(len(item.content) for item in self.items)

    def __str__(self):
        return (
            f"{self.original_length} -> {self.patched_length} bytes "
            f"({len(self.items)} items, {self.content_length} content bytes)"
        )
