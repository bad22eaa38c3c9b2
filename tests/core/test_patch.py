import attrs
import pytest

from mtgadiff.patch import UINT32_MAX, PatchItem, PatchSet, checksum

DIGEST = checksum(b"\x00")


def test_patch_item():
    item = PatchItem(0x10, b"\x01\x02\x03")
    assert item.end == 0x13
    assert item.preview == "010203"

    assert PatchItem(0, bytes(16)).preview == "00" * 16
    assert PatchItem(0, bytes(range(32))).preview == bytes(range(16)).hex() + "..."


def test_patch_item_validation():
    with pytest.raises(ValueError):
        PatchItem(0, b"")
    with pytest.raises(ValueError):
        PatchItem(-1, b"\x00")
    with pytest.raises(ValueError):
        PatchItem(UINT32_MAX + 1, b"\x00")
    with pytest.raises(TypeError):
        PatchItem("1", b"\x00")
    with pytest.raises(TypeError):
        PatchItem(0, bytearray(b"\x00"))

    # Largest representable offset is still valid
    PatchItem(UINT32_MAX, b"\x00")


def test_patch_set_validation():
    with pytest.raises(ValueError):
        PatchSet(1, DIGEST[:-1], 1, DIGEST)
    with pytest.raises(ValueError):
        PatchSet(1, DIGEST, UINT32_MAX + 1, DIGEST)
    with pytest.raises(TypeError):
        PatchSet(1, DIGEST, 1, DIGEST, [b"\x00"])


def test_patch_set_immutable():
    patch = PatchSet(1, DIGEST, 2, DIGEST, [PatchItem(1, b"\x01")])
    assert isinstance(patch.items, tuple)
    assert patch.content_length == 1

    with pytest.raises(attrs.exceptions.FrozenInstanceError):
        patch.patched_length = 3
    with pytest.raises(attrs.exceptions.FrozenInstanceError):
        patch.items[0].offset = 0


def test_patch_set_equality():
    a = PatchSet(1, DIGEST, 2, DIGEST, [PatchItem(1, b"\x01")])
    b = PatchSet(1, DIGEST, 2, DIGEST, (PatchItem(1, b"\x01"),))
    c = PatchSet(1, DIGEST, 2, DIGEST, [PatchItem(1, b"\x02")])
    assert a == b
    assert a != c
    assert str(a) == "1 -> 2 bytes (1 items, 1 content bytes)"
