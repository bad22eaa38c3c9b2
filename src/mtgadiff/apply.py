#!/usr/bin/env python3

"""Verified patch application"""

from typing import Callable

from mtgadiff.errors import (
    OriginalChecksumMismatchError,
    OriginalLengthMismatchError,
    PatchedChecksumMismatchError,
    PatchedLengthMismatchError,
)
from mtgadiff.patch import PatchSet, checksum


class PatchApplier:
    """Reconstructs a patched buffer, validating both ends of the transformation"""

    @classmethod
    def apply(
        cls,
        original: bytes,
        patch: PatchSet,
        progress_cb: Callable[[int, int], None] | None = None,
    ) -> bytes:
        """
        Apply a patch to the original buffer

        Items are written in stored order, so later items win where items
        overlap. Items extending past the declared patched length fail the
        length validation before the output buffer is allocated.

        Args:
            original: Buffer the patch was generated against
            patch: Patch to apply
            progress_cb: Called with (items applied, item count) after each item

        Raises:
            OriginalLengthMismatchError: original is not the expected length
            OriginalChecksumMismatchError: original is not the expected content
            PatchedLengthMismatchError: Reconstructed buffer is not the expected length
            PatchedChecksumMismatchError: Reconstructed buffer is not the expected content
        """
        if len(original) != patch.original_length:
            raise OriginalLengthMismatchError(
                f"Original file length does not match patch information ({len(original)} != {patch.original_length})"
            )
        original_checksum = checksum(original)
        if original_checksum != patch.original_checksum:
            raise OriginalChecksumMismatchError(
                "Original file checksum does not match patch information "
                f"({original_checksum.hex()} != {patch.original_checksum.hex()})"
            )

        # Items past the declared length would grow the buffer beyond it
        patched_end = max((item.end for item in patch.items), default=0)
        if patched_end > patch.patched_length:
            raise PatchedLengthMismatchError(
                f"Patched file length does not match patch information ({patched_end} != {patch.patched_length})"
            )

        # Truncated or zero-extended copy of the original
        patched = bytearray(patch.patched_length)
        base = min(len(original), patch.patched_length)
        patched[:base] = original[:base]

        for idx, item in enumerate(patch.items):
            patched[item.offset : item.end] = item.content
            if progress_cb is not None:
                progress_cb(idx + 1, len(patch.items))

        # Validate generated file matches what was expected
        if len(patched) != patch.patched_length:
            raise PatchedLengthMismatchError(
                f"Patched file length does not match patch information ({len(patched)} != {patch.patched_length})"
            )
        patched_checksum = checksum(patched)
        if patched_checksum != patch.patched_checksum:
            raise PatchedChecksumMismatchError(
                "Patched file checksum does not match patch information "
                f"({patched_checksum.hex()} != {patch.patched_checksum.hex()})"
            )

        return bytes(patched)
