import random

import pytest

from mtgadiff.apply import PatchApplier
from mtgadiff.codec import PatchCodec
from mtgadiff.diff import DiffEngine
from mtgadiff.errors import (
    OriginalChecksumMismatchError,
    OriginalLengthMismatchError,
    PatchedChecksumMismatchError,
    PatchedLengthMismatchError,
)
from mtgadiff.patch import PatchItem, PatchSet, checksum


def test_growth():
    original = bytes([1, 2, 3])
    modified = bytes([1, 2, 3, 4, 5])
    assert PatchApplier.apply(original, DiffEngine.generate(original, modified)) == modified


def test_shrink():
    original = bytes([1, 2, 3, 4, 5])
    modified = bytes([1, 2, 3])
    assert PatchApplier.apply(original, DiffEngine.generate(original, modified)) == modified


def test_identity():
    data = b"\x7fELF unchanged"
    patch = DiffEngine.generate(data, data)
    assert len(patch.items) == 0
    assert PatchApplier.apply(data, patch) == data


def test_round_trip():
    rng = random.Random(42)
    codec = PatchCodec()

    for _ in range(50):
        original = bytes(rng.getrandbits(8) for _ in range(rng.randint(1, 300)))
        if rng.random() < 0.5:
            # Mostly similar buffers
            modified = bytearray(original)
            for _ in range(rng.randint(0, 10)):
                modified[rng.randrange(len(modified))] = rng.getrandbits(8)
            modified = modified[: rng.randint(1, len(modified))]
            modified += bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 20)))
        else:
            modified = bytes(rng.getrandbits(8) for _ in range(rng.randint(1, 300)))

        patch = DiffEngine.generate(original, bytes(modified))
        assert PatchApplier.apply(original, patch) == modified
        assert PatchApplier.apply(original, codec.decode(codec.encode(patch))) == modified


def test_returns_bytes():
    result = PatchApplier.apply(bytearray(b"\x00\x01"), DiffEngine.generate(b"\x00\x01", b"\x00\x02"))
    assert isinstance(result, bytes)
    assert result == b"\x00\x02"


def test_original_length_mismatch():
    patch = DiffEngine.generate(b"\x01\x02\x03", b"\x01\x02\x04")
    with pytest.raises(OriginalLengthMismatchError):
        PatchApplier.apply(b"\x01\x02", patch)


def test_original_checksum_mismatch():
    patch = DiffEngine.generate(b"\x01\x02\x03", b"\x01\x02\x04")
    with pytest.raises(OriginalChecksumMismatchError):
        PatchApplier.apply(b"\x01\x02\x05", patch)


def test_tampered_original_checksum():
    original = b"original contents"
    modified = b"modified contents!"
    codec = PatchCodec()
    data = codec.encode(DiffEngine.generate(original, modified))

    for bit in range(8):
        tampered = bytearray(data)
        tampered[14 + bit] ^= 1 << bit
        with pytest.raises(OriginalChecksumMismatchError):
            PatchApplier.apply(original, codec.decode(bytes(tampered)))


def test_tampered_patched_checksum():
    original = b"original contents"
    modified = b"modified contents!"
    codec = PatchCodec()
    data = codec.encode(DiffEngine.generate(original, modified))

    for bit in range(8):
        tampered = bytearray(data)
        tampered[81 - bit] ^= 1 << bit
        with pytest.raises(PatchedChecksumMismatchError):
            PatchApplier.apply(original, codec.decode(bytes(tampered)))


def test_tampered_content():
    original = bytes(16)
    patch = DiffEngine.generate(original, b"\x01" * 16)
    tampered = PatchSet(
        patch.original_length,
        patch.original_checksum,
        patch.patched_length,
        patch.patched_checksum,
        [PatchItem(0, b"\x01" * 15 + b"\x02")],
    )
    with pytest.raises(PatchedChecksumMismatchError):
        PatchApplier.apply(original, tampered)


def test_overlap_last_write_wins():
    original = bytes(4)
    expected = b"\xaa\xbb\xaa\x00"
    patch = PatchSet(
        4,
        checksum(original),
        4,
        checksum(expected),
        [PatchItem(0, b"\xaa\xaa\xaa"), PatchItem(1, b"\xbb")],
    )
    assert PatchApplier.apply(original, patch) == expected


def test_item_gap_zero_filled():
    original = b"\x01\x02\x03\x04"
    expected = b"\x01\x02\x03\x04\x00\x00\x05\x06"
    patch = PatchSet(4, checksum(original), 8, checksum(expected), [PatchItem(6, b"\x05\x06")])
    assert PatchApplier.apply(original, patch) == expected


def test_item_beyond_patched_length():
    original = b"\x01\x02\x03\x04"
    patch = PatchSet(4, checksum(original), 4, checksum(original), [PatchItem(6, b"\x05")])
    with pytest.raises(PatchedLengthMismatchError):
        PatchApplier.apply(original, patch)


def test_apply_progress():
    original = b"\x00\x00\x00\x00\x00"
    patch = DiffEngine.generate(original, b"\x01\x00\x01\x00\x00")
    calls = []
    PatchApplier.apply(original, patch, lambda done, total: calls.append((done, total)))
    assert calls == [(1, 2), (2, 2)]


def test_forged_huge_offset():
    # Decoded item far past the declared length is rejected before allocating
    original = b"\x01\x02\x03\x04"
    forged = PatchSet(4, checksum(original), 4, checksum(original), [PatchItem(0xFFFFFFF0, b"\x05")])
    codec = PatchCodec()
    data = codec.encode(forged)
    assert len(data) == 95

    with pytest.raises(PatchedLengthMismatchError):
        PatchApplier.apply(original, codec.decode(data))
