#!/usr/bin/env python3

"""Positional binary diff generation"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

from mtgadiff.errors import EmptyInputError, InputTooLargeError
from mtgadiff.patch import UINT32_MAX, PatchItem, PatchSet, checksum

Run = Tuple[int, int]


class DiffEngine:
    """
    Generates a PatchSet by comparing two buffers byte by byte.

    Comparison is purely positional: bytes at the same index are compared,
    so an insertion or deletion shifts every following byte into the diff.
    """

    DEFAULT_CHUNK_SIZE = 1 << 20

    @classmethod
    def _scan(cls, original: bytes, modified: bytes, start: int, stop: int) -> List[Run]:
        """Find maximal runs of mismatched bytes in [start, stop)"""
        runs: List[Run] = []
        run_start = -1

        # Views avoid copying the compared range
        original_view = memoryview(original)[start:stop]
        modified_view = memoryview(modified)[start:stop]
        for idx, (a, b) in enumerate(zip(original_view, modified_view), start):
            if a != b:
                if run_start < 0:
                    run_start = idx
            elif run_start >= 0:
                runs.append((run_start, idx))
                run_start = -1

        # Run still open at the end of the range
        if run_start >= 0:
            runs.append((run_start, stop))
        return runs

    @classmethod
    def _scan_parallel(
        cls, original: bytes, modified: bytes, length: int, max_workers: int, chunk_size: int
    ) -> List[Run]:
        """Scan disjoint chunks concurrently and coalesce runs split by chunk boundaries"""
        bounds = [(start, min(start + chunk_size, length)) for start in range(0, length, chunk_size)]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            chunk_runs = executor.map(lambda b: cls._scan(original, modified, b[0], b[1]), bounds)

            merged: List[Run] = []
            for runs in chunk_runs:
                for start, end in runs:
                    # Runs from a single scan never touch, only chunk splits do
                    if merged and merged[-1][1] == start:
                        merged[-1] = (merged[-1][0], end)
                    else:
                        merged.append((start, end))
        return merged

    @classmethod
    def generate(
        cls,
        original: bytes,
        modified: bytes,
        max_workers: int = 1,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> PatchSet:
        """
        Generate the patch that transforms original into modified

        Args:
            original: Buffer the patch will be applied to
            modified: Buffer the patch reconstructs
            max_workers: Number of threads scanning the overlapping range
            chunk_size: Bytes scanned per thread task when max_workers > 1

        Raises:
            EmptyInputError: Either buffer is empty
            InputTooLargeError: Either buffer is longer than the format supports
        """
        if len(original) == 0 or len(modified) == 0:
            raise EmptyInputError(f"Empty input buffer (original {len(original)}, modified {len(modified)})")
        if len(original) > UINT32_MAX or len(modified) > UINT32_MAX:
            raise InputTooLargeError(
                f"Input buffer exceeds {UINT32_MAX} bytes (original {len(original)}, modified {len(modified)})"
            )
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive ({chunk_size})")

        original_checksum = checksum(original)
        patched_checksum = checksum(modified)

        # Identical buffers, nothing to scan
        if len(original) == len(modified) and original_checksum == patched_checksum:
            return PatchSet(len(original), original_checksum, len(modified), patched_checksum)

        min_length = min(len(original), len(modified))
        if max_workers > 1 and min_length > chunk_size:
            runs = cls._scan_parallel(original, modified, min_length, max_workers, chunk_size)
        else:
            runs = cls._scan(original, modified, 0, min_length)

        items = [PatchItem(start, bytes(modified[start:end])) for start, end in runs]

        # Trailing data is always a separate item, even if the last run touches it
        if len(modified) > len(original):
            items.append(PatchItem(len(original), bytes(modified[len(original) :])))

        return PatchSet(len(original), original_checksum, len(modified), patched_checksum, items)
