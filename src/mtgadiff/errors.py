#!/usr/bin/env python3

"""Patch generation, encoding and application failures"""


class PatchError(Exception):
    """Base class for all patch failures"""


class EmptyInputError(PatchError):
    """Original or modified buffer has zero length"""


class InputTooLargeError(PatchError):
    """Buffer length cannot be represented in the patch format"""


class IOFailureError(PatchError):
    """Underlying stream failed while reading or writing a patch"""


class ValidationError(PatchError):
    """Generic patch validation exception"""


class MalformedFormatError(ValidationError):
    """Patch data does not follow the patch file format"""


class UnsupportedVersionError(ValidationError):
    """Patch file version is not supported"""


class TruncatedDataError(ValidationError):
    """Patch data ended before a complete field could be read"""


class OriginalLengthMismatchError(ValidationError):
    """Original buffer length does not match patch information"""


class OriginalChecksumMismatchError(ValidationError):
    """Original buffer checksum does not match patch information"""


class PatchedLengthMismatchError(ValidationError):
    """Patched buffer length does not match patch information"""


class PatchedChecksumMismatchError(ValidationError):
    """Patched buffer checksum does not match patch information"""
