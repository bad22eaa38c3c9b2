#!/usr/bin/env python3

"""Patch file format configuration"""

import pathlib
from typing import Any

import yaml
from attrs import define as _attrs_define
from attrs import field as _attrs_field
from typing_extensions import Self

MAGIC_SIZE = 8


def _to_magic(value) -> bytes:
    if isinstance(value, str):
        return value.encode("ascii")
    if not isinstance(value, (bytes, bytearray, list, tuple)):
        raise TypeError(f"magic must be str or bytes (got {type(value).__name__})")
    return bytes(value)


def _magic(_instance, attribute, value):
    if len(value) != MAGIC_SIZE:
        raise ValueError(f"{attribute.name} must be {MAGIC_SIZE} bytes (got {len(value)})")


def _uint8(_instance, attribute, value):
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{attribute.name} must be an int (got {type(value).__name__})")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{attribute.name} does not fit in uint8 ({value})")


@_attrs_define(frozen=True)
class PatchFormat:
    """
    Identity of the patch file format

    Attributes:
        magic (bytes): File identifier at the start of every patch
        version_major (int): Only supported major version
        version_minor (int): Only supported minor version
    """

    magic: bytes = _attrs_field(converter=_to_magic, validator=_magic)
    version_major: int = _attrs_field(validator=_uint8)
    version_minor: int = _attrs_field(validator=_uint8)

    @property
    def version(self) -> tuple[int, int]:
        return (self.version_major, self.version_minor)

    def __str__(self):
        return f"{self.magic.decode('ascii', errors='replace')} v{self.version_major}.{self.version_minor}"

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> Self:
        """Construct format from a dictionary, missing keys take default values"""
        unknown = set(values) - {"magic", "version_major", "version_minor"}
        if unknown:
            raise ValueError(f"Unknown patch format keys: {', '.join(sorted(unknown))}")
        return cls(
            values.get("magic", DEFAULT_FORMAT.magic),
            values.get("version_major", DEFAULT_FORMAT.version_major),
            values.get("version_minor", DEFAULT_FORMAT.version_minor),
        )

    @classmethod
    def from_yaml(cls, path: str | pathlib.Path) -> Self:
        """Load format from a YAML file"""
        with open(path, "r", encoding="utf-8") as f:
            values = yaml.safe_load(f)
        if values is None:
            values = {}
        if not isinstance(values, dict):
            raise ValueError(f"{path} does not contain a mapping")
        return cls.from_dict(values)


DEFAULT_FORMAT = PatchFormat(b"MTGADIFF", 0x01, 0x00)
