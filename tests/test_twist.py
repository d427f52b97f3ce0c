import logging

import pytest

from cornerkube import (
    CubeInvariantError,
    InvalidStateError,
    Slot,
    Vec3,
    apply_twist,
    canonical_frame,
    derive_twist,
    parse_twist,
)


@pytest.mark.parametrize("slot", list(Slot))
@pytest.mark.parametrize("twist", [0, 1, 2])
def test_twist_round_trip(slot, twist):
    frame = apply_twist(canonical_frame(slot), twist)
    assert derive_twist(frame.up, slot) == twist


def test_twist_cycles_the_canonical_axes():
    u0, r0, f0 = canonical_frame(Slot.URF)
    assert apply_twist((u0, r0, f0), 0) == (u0, r0, f0)
    assert apply_twist((u0, r0, f0), 1) == (f0, u0, r0)
    assert apply_twist((u0, r0, f0), 2) == (r0, f0, u0)


@pytest.mark.parametrize("twist", [-1, 3, "1"])
def test_apply_twist_rejects_bad_label(twist):
    with pytest.raises(InvalidStateError):
        apply_twist(canonical_frame(Slot.ULB), twist)


def test_derive_twist_accepts_either_sign_on_side_axes():
    assert derive_twist(Vec3(0, 0, -1), Slot.URF) == 1
    assert derive_twist(Vec3(0, 0, 1), Slot.URF) == 1
    assert derive_twist(Vec3(-1, 0, 0), Slot.URF) == 2


def test_derive_twist_refuses_to_guess(caplog):
    caplog.set_level(logging.ERROR, logger="cornerkube")
    with pytest.raises(CubeInvariantError):
        derive_twist(Vec3(0, -1, 0), Slot.URF)
    assert "matches no axis of URF" in caplog.text


@pytest.mark.parametrize("value, expected", [(0, 0), ("1", 1), (" 2 ", 2)])
def test_parse_twist(value, expected):
    assert parse_twist(value) == expected


@pytest.mark.parametrize("value", [3, -1, "5", "x", "", "1.0"])
def test_parse_twist_rejects_bad_labels(value):
    with pytest.raises(InvalidStateError):
        parse_twist(value)
