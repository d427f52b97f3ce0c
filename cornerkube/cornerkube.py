# ========================================
# Copyright 2021 22nd Solutions, LLC
# Copyright 2024 Martin TOUZOT
#
# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included
# in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES
# OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
# DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR
# OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE
# USE OR OTHER DEALINGS IN THE SOFTWARE.
#
# ========================================
"""Defines the corner-cubie model of a 3x3 cube and its face turns."""

from __future__ import annotations
from enum import Enum, IntEnum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union
import re
import logging

# -------------------------------------------------
# -------------------------------------------------
# Setup Logging capability
# -------------------------------------------------
# -------------------------------------------------
logging.basicConfig()
logger = logging.getLogger("cornerkube")


# -------------------------------------------------
# Errors raised by the cube model
# -------------------------------------------------
class CubeError(Exception):
    """Base class for all the cube model errors."""


class InvalidMoveError(CubeError, ValueError):
    """A move token outside of the 18 face turns."""


class InvalidStateError(CubeError, ValueError):
    """A cube state, slot, piece or twist that cannot exist."""


class CubeInvariantError(CubeError, RuntimeError):
    """
    The rotation math produced something impossible.

    Raised when a rotated coordinate is not one of the 8 corners, or when a
    rotated up-vector does not line up with any axis of its new slot.
    """


# -------------------------------------------------
# Coordinate model
# -------------------------------------------------
class Vec3(NamedTuple):
    """Integer lattice vector, each component in {-1, 0, +1}."""

    x: int
    y: int
    z: int


class Axis(IntEnum):
    """World axes, usable as an index into a :class:`Vec3`."""

    X = 0
    Y = 1
    Z = 2


class Slot(IntEnum):
    """
    The 8 corner slots.

    The value is the slot index, the name its 3-letter mnemonic.
    """

    ULB = 0
    URB = 1
    URF = 2
    ULF = 3
    DLF = 4
    DRF = 5
    DRB = 6
    DLB = 7

    @property
    def label(self) -> str:
        """Return the 3-letter mnemonic of the slot."""
        return self.name

    @property
    def coordinate(self) -> Vec3:
        """Return the signed lattice coordinate of the slot."""
        return coordinate_of(self)

    @classmethod
    def parse(cls, value: Union[Slot, int, str]) -> Slot:
        """
        Convert a slot index or mnemonic into a Slot.

        :param value: Slot, index 0-7, or mnemonic such as "ULB"
            (case-insensitive). Digit strings are read as indices.
        :type value: Union[Slot, int, str]
        :returns: The matching slot.
        :rtype: Slot
        :raises InvalidStateError: If the value names no slot.
        """
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                value = int(text)
            elif text.upper() in cls.__members__:
                return cls[text.upper()]
            else:
                raise InvalidStateError(f"Unknown slot {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise InvalidStateError(f"Unknown slot {value!r}") from None


SLOT_COORDINATES: Dict[Slot, Vec3] = {
    Slot.ULB: Vec3(-1, 1, -1),
    Slot.URB: Vec3(1, 1, -1),
    Slot.URF: Vec3(1, 1, 1),
    Slot.ULF: Vec3(-1, 1, 1),
    Slot.DLF: Vec3(-1, -1, 1),
    Slot.DRF: Vec3(1, -1, 1),
    Slot.DRB: Vec3(1, -1, -1),
    Slot.DLB: Vec3(-1, -1, -1),
}
COORDINATE_SLOTS: Dict[Vec3, Slot] = {v: k for k, v in SLOT_COORDINATES.items()}

# Read-only label table for logging and display
SLOT_LABELS: Dict[int, str] = {int(slot): slot.label for slot in Slot}

UPPER_SLOTS: Tuple[Slot, ...] = (Slot.ULB, Slot.URB, Slot.URF, Slot.ULF)


def coordinate_of(slot: Union[Slot, int]) -> Vec3:
    """Return the lattice coordinate of a slot."""
    return SLOT_COORDINATES[Slot.parse(slot)]


def slot_of(coordinate: Tuple[int, int, int]) -> Optional[Slot]:
    """Return the slot at a lattice coordinate, or None if there is none."""
    return COORDINATE_SLOTS.get(Vec3(*coordinate))


# -------------------------------------------------
# Piece orientation encoding
# -------------------------------------------------
class AxisFrame(NamedTuple):
    """Local up/right/front directions of a piece, in world space."""

    up: Vec3
    right: Vec3
    front: Vec3


def canonical_frame(slot: Union[Slot, int]) -> AxisFrame:
    """
    Derive the canonical axis triad of a slot.

    For a slot at (cx, cy, cz) the triad is up=(0, cy, 0), right=(cx, 0, 0)
    and front=(0, 0, cz).

    :param slot: The slot to derive the triad for.
    :type slot: Union[Slot, int]
    :returns: The canonical (up, right, front) frame.
    :rtype: AxisFrame
    """
    c = coordinate_of(slot)
    return AxisFrame(Vec3(0, c.y, 0), Vec3(c.x, 0, 0), Vec3(0, 0, c.z))


def apply_twist(canonical: AxisFrame, twist: int) -> AxisFrame:
    """
    Turn a twist label into the frame of a piece.

    Twist 1 points the piece's up-axis at the canonical front, its right at
    the canonical up and its front at the canonical right. Twist 2 is the
    inverse cycle.

    :param canonical: Canonical triad of the slot the piece sits in.
    :type canonical: AxisFrame
    :param twist: Twist label, 0, 1 or 2.
    :type twist: int
    :returns: The frame of the twisted piece.
    :rtype: AxisFrame
    :raises InvalidStateError: If the twist is not 0, 1 or 2.
    """
    u0, r0, f0 = canonical
    if twist == 0:
        return AxisFrame(u0, r0, f0)
    elif twist == 1:
        return AxisFrame(f0, u0, r0)
    elif twist == 2:
        return AxisFrame(r0, f0, u0)
    raise InvalidStateError(f"Twist must be 0, 1 or 2, not {twist!r}")


def parse_twist(value: Union[int, str]) -> int:
    """
    Convert a twist label into an int.

    :param value: 0, 1 or 2, as an int or a digit string.
    :type value: Union[int, str]
    :returns: The twist.
    :rtype: int
    :raises InvalidStateError: If the value is not 0, 1 or 2.
    """
    text = str(value).strip()
    if text not in ("0", "1", "2"):
        raise InvalidStateError(f"Twist must be 0, 1 or 2, not {value!r}")
    return int(text)


def derive_twist(up: Vec3, slot: Union[Slot, int]) -> int:
    """
    Recover the twist label of a piece from its up-vector.

    :param up: The up-vector of the piece after a rotation.
    :type up: Vec3
    :param slot: The slot the piece now occupies.
    :type slot: Union[Slot, int]
    :returns: 0 if up is the canonical up of the slot, 1 if it lies on the
        front axis, 2 if it lies on the right axis.
    :rtype: int
    :raises CubeInvariantError: If up lines up with none of them.
    """
    u0, _, _ = canonical_frame(slot)
    if up == u0:
        return 0
    if up.y == 0 and abs(up.z) == 1:
        return 1
    if up.y == 0 and abs(up.x) == 1:
        return 2
    logger.error(f"Up-vector {tuple(up)} matches no axis of {Slot(slot).label}")
    raise CubeInvariantError(
        f"Cannot derive twist from up-vector {tuple(up)} at {Slot(slot).label}"
    )


def rotate_vector(v: Tuple[int, int, int], axis: Axis, quarter_turns: int) -> Vec3:
    """
    Rotate a lattice vector by quarter turns about a world axis.

    A positive quarter turn is +90 degrees by the right-hand rule. Only
    integer swaps and negations are involved.

    :param v: The vector to rotate.
    :type v: Tuple[int, int, int]
    :param axis: Axis of rotation.
    :type axis: Axis
    :param quarter_turns: Signed number of quarter turns.
    :type quarter_turns: int
    :returns: The rotated vector.
    :rtype: Vec3
    """
    x, y, z = v
    for loop1 in range(quarter_turns % 4):
        if axis == Axis.X:
            y, z = -z, y
        elif axis == Axis.Y:
            x, z = z, -x
        else:
            x, y = -y, x
    return Vec3(x, y, z)


# -----------------------------------------------
# Defines Cube moves - the 6 faces, each turned a
# quarter clockwise, counter-clockwise or half
# ----------------------------------------------
class Face(Enum):
    """The 6 faces that can be turned."""

    U = "U"
    L = "L"
    F = "F"
    R = "R"
    B = "B"
    D = "D"


class FaceLayer(NamedTuple):
    """Axis, layer sign and plain-turn quarter count of a face."""

    axis: Axis
    sign: int
    turns: int


FACE_LAYERS: Dict[Face, FaceLayer] = {
    Face.U: FaceLayer(Axis.Y, 1, -1),
    Face.D: FaceLayer(Axis.Y, -1, 1),
    Face.R: FaceLayer(Axis.X, 1, -1),
    Face.L: FaceLayer(Axis.X, -1, 1),
    Face.F: FaceLayer(Axis.Z, 1, -1),
    Face.B: FaceLayer(Axis.Z, -1, 1),
}

MOVE_PATTERN = re.compile(r"^(U|D|R|L|F|B)('|2)?$")


class Move(Enum):
    """
    The 18 face turns.

    The value is the standard notation: a face letter, optionally followed
    by ' (counter-clockwise) or 2 (half turn).
    """

    U = "U"
    U_PRIME = "U'"
    U2 = "U2"
    D = "D"
    D_PRIME = "D'"
    D2 = "D2"
    R = "R"
    R_PRIME = "R'"
    R2 = "R2"
    L = "L"
    L_PRIME = "L'"
    L2 = "L2"
    F = "F"
    F_PRIME = "F'"
    F2 = "F2"
    B = "B"
    B_PRIME = "B'"
    B2 = "B2"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: Union[Move, str]) -> Move:
        """
        Convert a notation token into a Move.

        :param token: Token such as "R", "U'" or "F2".
        :type token: Union[Move, str]
        :returns: The matching move.
        :rtype: Move
        :raises InvalidMoveError: If the token is not one of the 18 moves.
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str) or not MOVE_PATTERN.fullmatch(token):
            raise InvalidMoveError(f"Illegal move specification {token!r}")
        return cls(token)

    @classmethod
    def of_face(cls, face: Face) -> List[Move]:
        """Return the plain, prime and half turn of a face."""
        return [move for move in cls if move.face == face]

    @property
    def face(self) -> Face:
        return Face(self.value[0])

    @property
    def modifier(self) -> str:
        """Return "", "'" or "2"."""
        return self.value[1:]

    @property
    def is_half_turn(self) -> bool:
        return self.modifier == "2"

    @property
    def axis(self) -> Axis:
        return FACE_LAYERS[self.face].axis

    @property
    def quarter_turns(self) -> int:
        """Signed quarter turns about the move's axis: -1, +1 or +2."""
        plain = FACE_LAYERS[self.face].turns
        if self.modifier == "2":
            return 2
        elif self.modifier == "'":
            return -plain
        return plain

    @property
    def inverse(self) -> Move:
        """Return the move that undoes this one."""
        if self.modifier == "2":
            return self
        elif self.modifier == "'":
            return Move(self.face.value)
        return Move(self.face.value + "'")

    def moves_slot(self, slot: Union[Slot, int]) -> bool:
        """Check if the slot lies in the layer turned by this move."""
        layer = FACE_LAYERS[self.face]
        return coordinate_of(slot)[layer.axis] == layer.sign


def layer_slots(face: Face) -> List[Slot]:
    """Return the 4 slots of a face's layer, in slot order."""
    move = Move(face.value)
    return [slot for slot in Slot if move.moves_slot(slot)]


class Moves:
    """
    A sequence of face turns.

    Translation between the cubing notation, e.g. "R U R' U2", and a list
    of :class:`Move`.
    """

    def __init__(self, move_str: Union[str, Iterable[Union[Move, str]]] = "") -> None:
        """
        Moves class constructor.

        :param move_str: Whitespace separated notation, or an iterable of
            moves or tokens, defaults to an empty sequence.
        :type move_str: Union[str, Iterable[Union[Move, str]]]
        :raises InvalidMoveError: If any token is not a legal move.
        """
        self.move_list: List[Move] = list()
        self.add_moves(move_str)

    def add_moves(self, move_str: Union[str, Iterable[Union[Move, str]]]) -> None:
        """
        Append moves to the sequence.

        Tokens are validated before anything is appended, so a bad token
        leaves the sequence unchanged.

        :param move_str: Notation string or iterable of moves or tokens.
        :type move_str: Union[str, Iterable[Union[Move, str]]]
        :raises InvalidMoveError: If any token is not a legal move.
        """
        if isinstance(move_str, str):
            tokens = move_str.split()
        else:
            tokens = list(move_str)
        self.move_list.extend([Move.parse(token) for token in tokens])

    def add(self, move: Union[Move, str]) -> None:
        """Append a single move."""
        self.move_list.append(Move.parse(move))

    def clear(self) -> None:
        self.move_list = list()

    def reverse(self) -> Moves:
        """
        Return the sequence that undoes this one.

        The moves are taken in reverse order and each one inverted.

        :returns: The undoing sequence.
        :rtype: Moves
        """
        return Moves([move.inverse for move in reversed(self.move_list)])

    def __iter__(self) -> Iterator[Move]:
        return iter(self.move_list)

    def __len__(self) -> int:
        return len(self.move_list)

    def __getitem__(self, index: int) -> Move:
        return self.move_list[index]

    def __add__(self, other: Moves) -> Moves:
        return Moves(self.move_list + other.move_list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Moves):
            return NotImplemented
        return self.move_list == other.move_list

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __str__(self) -> str:
        return " ".join(move.value for move in self.move_list)

    def __repr__(self) -> str:
        return f"Moves({str(self)!r})"


# -------------------------------------------------
# Pieces and cube state
# -------------------------------------------------
class CornerPiece(NamedTuple):
    """Where a corner piece sits, its twist, and its axis frame."""

    slot: Slot
    twist: int
    frame: AxisFrame


class SlotOccupant(NamedTuple):
    """Result of a slot lookup."""

    piece: int
    twist: int


def make_piece(slot: Union[Slot, int, str], twist: int = 0) -> CornerPiece:
    """Build a piece at a slot with the frame derived from its twist."""
    slot = Slot.parse(slot)
    return CornerPiece(slot, twist, apply_twist(canonical_frame(slot), twist))


# 3x3 display cells (row, col) of each slot, looking down on the U layer
# and through the cube at the D layer
TOP_SLOT_CELLS: Dict[Slot, Tuple[int, int]] = {
    Slot.ULB: (0, 0),
    Slot.URB: (0, 2),
    Slot.URF: (2, 2),
    Slot.ULF: (2, 0),
}
BOTTOM_SLOT_CELLS: Dict[Slot, Tuple[int, int]] = {
    Slot.DLF: (2, 0),
    Slot.DRF: (2, 2),
    Slot.DRB: (0, 2),
    Slot.DLB: (0, 0),
}


class CubeState:
    """
    Define the CubeState class.

    Hold the 8 corner pieces of a 3x3 cube, indexed by piece identity.
    A CubeState is never modified: every move and every override returns
    a new one, so earlier states can be kept and branched from.
    """

    def __init__(self, pieces: Optional[Iterable[CornerPiece]] = None) -> None:
        """
        CubeState class constructor.

        :param pieces: The 8 pieces, piece i at index i. Defaults to the
            solved configuration, piece i at slot i with twist 0.
        :type pieces: Iterable[CornerPiece], optional
        :raises InvalidStateError: If the pieces do not fill the 8 slots
            exactly once, a twist is out of range, or a twist disagrees
            with the frame of its piece.
        """
        if pieces is None:
            pieces = [make_piece(slot) for slot in Slot]
        pieces = tuple(pieces)

        if len(pieces) != 8:
            raise InvalidStateError(f"Expected 8 pieces, got {len(pieces)}")
        self._pieces: Tuple[CornerPiece, ...] = tuple(
            self._check_piece(index, piece) for index, piece in enumerate(pieces)
        )
        if {piece.slot for piece in self._pieces} != set(Slot):
            raise InvalidStateError("Two pieces share a slot")

    @staticmethod
    def _check_piece(index: int, piece: CornerPiece) -> CornerPiece:
        slot = Slot.parse(piece.slot) if isinstance(piece.slot, int) else None
        if slot is None:
            raise InvalidStateError(f"Piece {index} has unknown slot {piece.slot!r}")
        if piece.twist not in (0, 1, 2) or isinstance(piece.twist, bool):
            raise InvalidStateError(
                f"Piece {index} has twist {piece.twist!r}, expected 0, 1 or 2"
            )
        try:
            frame = AxisFrame(*(Vec3(*v) for v in piece.frame))
        except TypeError:
            raise InvalidStateError(f"Piece {index} has a malformed frame") from None

        # the frame must be the slot's triad, its up-vector giving the twist
        if set(frame) != set(canonical_frame(slot)):
            raise InvalidStateError(
                f"Piece {index} frame is not aligned with {slot.label}"
            )
        if derive_twist(frame.up, slot) != piece.twist:
            raise InvalidStateError(
                f"Piece {index} has twist {piece.twist} but its frame gives "
                f"{derive_twist(frame.up, slot)}"
            )
        return CornerPiece(slot, piece.twist, frame)

    @property
    def pieces(self) -> Tuple[CornerPiece, ...]:
        return self._pieces

    def __getitem__(self, piece: int) -> CornerPiece:
        return self._pieces[piece]

    def __iter__(self) -> Iterator[CornerPiece]:
        return iter(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)

    def with_piece(
        self,
        piece: int,
        twist: int,
        slot: Optional[Union[Slot, int, str]] = None,
    ) -> CubeState:
        """
        Override the slot and twist of one piece.

        If the piece moves to another slot, the piece already there swaps
        into the vacated slot and keeps its twist.

        :param piece: Index of the piece, 0-7.
        :type piece: int
        :param twist: New twist of the piece.
        :type twist: int
        :param slot: New slot, defaults to the piece's current slot.
        :type slot: Union[Slot, int, str], optional
        :returns: The new state.
        :rtype: CubeState
        :raises InvalidStateError: On an unknown piece, slot or twist.
        """
        if not isinstance(piece, int) or not 0 <= piece < 8:
            raise InvalidStateError(f"Unknown piece {piece!r}")
        old_slot = self._pieces[piece].slot
        new_slot = old_slot if slot is None else Slot.parse(slot)

        pieces = list(self._pieces)
        if new_slot != old_slot:
            other = self.piece_at_slot(new_slot).piece
            pieces[other] = make_piece(old_slot, self._pieces[other].twist)
            logger.debug(f"Piece {other} swapped into {old_slot.label}")
        pieces[piece] = make_piece(new_slot, twist)
        return CubeState(pieces)

    def apply_move(self, move: Union[Move, str]) -> CubeState:
        """
        Apply a single face turn.

        Pieces outside the turning layer carry over unchanged. Pieces in the
        layer have their slot coordinate and frame rotated, and their twist
        derived again from the rotated up-vector.

        :param move: The move, or a notation token that is parsed first.
        :type move: Union[Move, str]
        :returns: The new state. This state is left untouched.
        :rtype: CubeState
        :raises InvalidMoveError: If the move is not one of the 18 moves.
        :raises CubeInvariantError: If the rotation lands off the corners.
        """
        move = Move.parse(move)
        axis = move.axis
        turns = move.quarter_turns
        logger.debug(f"Applying {move}")

        new_pieces = list()
        for piece in self._pieces:
            if not move.moves_slot(piece.slot):
                new_pieces.append(piece)
                continue

            new_coord = rotate_vector(coordinate_of(piece.slot), axis, turns)
            new_slot = slot_of(new_coord)
            if new_slot is None:
                logger.error(f"Invalid rotated coordinate {tuple(new_coord)}")
                raise CubeInvariantError(
                    f"Invalid rotated coordinate {tuple(new_coord)} for {move}"
                )

            frame = AxisFrame(*(rotate_vector(v, axis, turns) for v in piece.frame))
            new_pieces.append(
                CornerPiece(new_slot, derive_twist(frame.up, new_slot), frame)
            )

        return CubeState(new_pieces)

    def apply_moves(self, moves: Union[Moves, str, Iterable[Union[Move, str]]]) -> CubeState:
        """
        Apply a sequence of moves in order.

        :param moves: A Moves object, notation string or iterable of moves.
        :type moves: Union[Moves, str, Iterable[Union[Move, str]]]
        :returns: The state after the last move.
        :rtype: CubeState
        """
        if not isinstance(moves, Moves):
            moves = Moves(moves)
        state = self
        for move in moves:
            state = state.apply_move(move)
        return state

    def piece_at_slot(self, slot: Union[Slot, int, str]) -> Optional[SlotOccupant]:
        """
        Find which piece occupies a slot.

        :param slot: Slot, index or mnemonic.
        :type slot: Union[Slot, int, str]
        :returns: The piece index and its twist, or None if no piece is
            there (which a valid state never allows).
        :rtype: Optional[SlotOccupant]
        """
        slot = Slot.parse(slot)
        for index, piece in enumerate(self._pieces):
            if piece.slot == slot:
                return SlotOccupant(index, piece.twist)
        return None

    def is_solved(self) -> bool:
        """Check that every piece sits at its own slot with twist 0."""
        return all(
            piece.slot == index and piece.twist == 0
            for index, piece in enumerate(self._pieces)
        )

    def _key(self) -> Tuple[Tuple[int, int], ...]:
        return tuple((int(piece.slot), piece.twist) for piece in self._pieces)

    def __eq__(self, other: object) -> bool:
        """
        Check CubeState equality.

        Two states are equal when every piece has the same slot and twist.
        The axis frames are rotation scratch state and are not compared.
        """
        if not isinstance(other, CubeState):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        text = ", ".join(
            f"{piece.slot.label}/{piece.twist}" for piece in self._pieces
        )
        return f"CubeState([{text}])"

    def __str__(self) -> str:
        """
        Draw the U and D layers side by side.

        Each corner cell shows the piece sitting there and its twist as
        "piece:twist".

        :returns: A two-grid text picture of the corners.
        :rtype: str
        """
        grids = list()
        for cells, center in ((TOP_SLOT_CELLS, " U "), (BOTTOM_SLOT_CELLS, " D ")):
            grid = [[" . "] * 3 for loop1 in range(3)]
            grid[1][1] = center
            for slot, (row, col) in cells.items():
                occupant = self.piece_at_slot(slot)
                grid[row][col] = f"{occupant.piece}:{occupant.twist}"
            grids.append(grid)

        cube_str = "\n   U layer         D layer\n"
        for row in range(3):
            cube_str += " " + " ".join(grids[0][row])
            cube_str += "     " + " ".join(grids[1][row]) + "\n"
        return cube_str
