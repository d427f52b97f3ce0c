import itertools

import pytest

from cornerkube import (
    Axis,
    InvalidStateError,
    SLOT_LABELS,
    Slot,
    Vec3,
    canonical_frame,
    coordinate_of,
    rotate_vector,
    slot_of,
)


def dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def test_slot_coordinates_are_a_bijection():
    coords = [coordinate_of(slot) for slot in Slot]
    assert sorted(coords) == sorted(Vec3(*c) for c in itertools.product((-1, 1), repeat=3))
    for slot in Slot:
        assert slot_of(coordinate_of(slot)) == slot


def test_known_coordinates():
    assert coordinate_of(Slot.ULB) == (-1, 1, -1)
    assert coordinate_of(Slot.URF) == (1, 1, 1)
    assert coordinate_of(Slot.DLB) == (-1, -1, -1)
    assert Slot.DRF.coordinate == (1, -1, 1)


def test_slot_of_unknown_coordinate():
    assert slot_of((0, 0, 0)) is None
    assert slot_of((1, 0, 1)) is None


@pytest.mark.parametrize("axis", list(Axis))
@pytest.mark.parametrize("turns", [-1, 1, 2, 3])
def test_rotations_stay_on_corners(axis, turns):
    for slot in Slot:
        assert slot_of(rotate_vector(coordinate_of(slot), axis, turns)) is not None


def test_rotation_rule():
    assert rotate_vector((0, 1, 0), Axis.X, 1) == (0, 0, 1)
    assert rotate_vector((1, 0, 0), Axis.Y, 1) == (0, 0, -1)
    assert rotate_vector((1, 0, 0), Axis.Z, 1) == (0, 1, 0)
    assert rotate_vector((1, 2, 3), Axis.Y, -1) == rotate_vector((1, 2, 3), Axis.Y, 3)
    assert rotate_vector((1, 2, 3), Axis.Z, 4) == (1, 2, 3)


def test_canonical_frame_is_orthogonal():
    for slot in Slot:
        up, right, front = canonical_frame(slot)
        c = coordinate_of(slot)
        assert up == (0, c.y, 0)
        assert right == (c.x, 0, 0)
        assert front == (0, 0, c.z)
        assert dot(up, right) == dot(up, front) == dot(right, front) == 0


def test_slot_labels():
    assert [SLOT_LABELS[i] for i in range(8)] == [
        "ULB", "URB", "URF", "ULF", "DLF", "DRF", "DRB", "DLB"
    ]


@pytest.mark.parametrize(
    "value, expected",
    [(Slot.URB, Slot.URB), (5, Slot.DRF), ("5", Slot.DRF), ("ulf", Slot.ULF), ("DLB", Slot.DLB)],
)
def test_slot_parse(value, expected):
    assert Slot.parse(value) == expected


@pytest.mark.parametrize("value", [8, -1, "UUU", "", "9"])
def test_slot_parse_rejects_unknown(value):
    with pytest.raises(InvalidStateError):
        Slot.parse(value)


@pytest.mark.parametrize("value", [8, 9, -1])
def test_coordinate_of_rejects_unknown_slot(value):
    with pytest.raises(InvalidStateError):
        coordinate_of(value)
