"""Corner-cubie simulator and look-ahead puzzles for a 3x3 cube."""

from cornerkube.cornerkube import (
    Axis,
    AxisFrame,
    CornerPiece,
    CubeError,
    CubeInvariantError,
    CubeState,
    Face,
    InvalidMoveError,
    InvalidStateError,
    Move,
    Moves,
    Slot,
    SlotOccupant,
    SLOT_LABELS,
    UPPER_SLOTS,
    Vec3,
    apply_twist,
    canonical_frame,
    coordinate_of,
    derive_twist,
    layer_slots,
    make_piece,
    parse_twist,
    rotate_vector,
    slot_of,
)
from cornerkube.puzzle import (
    Puzzle,
    PuzzleGenerator,
    Solution,
    is_legal_sequence,
    track_corner,
)
from cornerkube.selftest import run_self_test

__version__ = "0.1.0"
