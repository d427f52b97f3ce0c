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
"""
Look-ahead puzzles: follow one upper corner through a short sequence.

Classes:
    Solution
    Puzzle
    PuzzleGenerator
"""
from typing import Iterable, NamedTuple, Optional, Union
import random
import logging

from cornerkube.cornerkube import (
    CubeState,
    Face,
    Move,
    Moves,
    Slot,
    UPPER_SLOTS,
)

logger = logging.getLogger("cornerkube.puzzle")

MAX_ATTEMPTS = 500
MIN_MOVES = 2
MAX_MOVES = 5


class Solution(NamedTuple):
    """Final slot and twist of the tracked corner."""

    slot: Slot
    twist: int


def track_corner(
    start_slot: Union[Slot, int, str],
    start_twist: int,
    moves: Union[Moves, str, Iterable[Union[Move, str]]],
) -> Solution:
    """
    Follow one corner through a move sequence.

    Start from the solved cube with the piece at start_slot given
    start_twist, apply the moves in order, and report where that piece
    ends up.

    :param start_slot: Slot, and piece, to follow.
    :type start_slot: Union[Slot, int, str]
    :param start_twist: Twist of the piece before the first move.
    :type start_twist: int
    :param moves: The move sequence.
    :type moves: Union[Moves, str, Iterable[Union[Move, str]]]
    :returns: Final slot and twist of the piece.
    :rtype: Solution
    """
    piece = int(Slot.parse(start_slot))
    if not isinstance(moves, Moves):
        moves = Moves(moves)

    state = CubeState().with_piece(piece, start_twist)
    logger.debug(
        f"Start corner {piece} at {Slot(piece).label} twist {start_twist}"
    )
    for move in moves:
        state = state.apply_move(move)
        logger.debug(
            f"After {move} -> {state[piece].slot.label} twist {state[piece].twist}"
        )
    return Solution(state[piece].slot, state[piece].twist)


def is_legal_sequence(
    start_slot: Union[Slot, int, str],
    start_twist: int,
    moves: Union[Moves, str, Iterable[Union[Move, str]]],
) -> bool:
    """Check that the tracked corner ends back in the upper layer."""
    return track_corner(start_slot, start_twist, moves).slot in UPPER_SLOTS


class Puzzle(NamedTuple):
    """A starting corner, the moves to follow, and the expected answer."""

    start_slot: Slot
    start_twist: int
    moves: Moves
    solution: Solution

    def check(self, slot: Union[Slot, int, str], twist: int) -> bool:
        """
        Check an answer against the solution.

        :param slot: The slot the player picked.
        :type slot: Union[Slot, int, str]
        :param twist: The twist the player picked.
        :type twist: int
        :returns: True if both slot and twist are right.
        :rtype: bool
        """
        return Slot.parse(slot) == self.solution.slot and twist == self.solution.twist

    def __str__(self) -> str:
        return (
            f"{self.start_slot.label} twist {self.start_twist}: {self.moves}"
        )


class PuzzleGenerator:
    """
    Generate random look-ahead puzzles.

    Every move of a generated sequence turns a layer holding the tracked
    corner, no face is turned twice in a row, and the corner always ends
    in the upper layer.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_ATTEMPTS,
        min_moves: int = MIN_MOVES,
        max_moves: int = MAX_MOVES,
    ) -> None:
        """
        PuzzleGenerator class constructor.

        :param rng: Random source, defaults to a fresh random.Random.
        :type rng: random.Random, optional
        :param max_attempts: Attempts before the U-layer fallback.
        :type max_attempts: int
        :param min_moves: Shortest sequence length.
        :type min_moves: int
        :param max_moves: Longest sequence length.
        :type max_moves: int
        :raises ValueError: If the length bounds are inconsistent.
        """
        if min_moves < 1 or max_moves < min_moves:
            raise ValueError(
                f"Invalid move count range [{min_moves}, {max_moves}]"
            )
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts
        self.min_moves = min_moves
        self.max_moves = max_moves

    def generate(self) -> Puzzle:
        """
        Generate one puzzle.

        Retry random sequences until one brings the corner back to the
        upper layer. After max_attempts failures, fall back to two random
        U-layer moves.

        :returns: The puzzle and its solution.
        :rtype: Puzzle
        """
        for attempt in range(self.max_attempts):
            puzzle = self._attempt()
            if puzzle is not None:
                logger.info(
                    f"Generated {puzzle} -> {puzzle.solution.slot.label} "
                    f"twist {puzzle.solution.twist} "
                    f"after {attempt + 1} attempt(s)"
                )
                return puzzle

        logger.warning(
            f"No legal puzzle after {self.max_attempts} attempts, using U moves"
        )
        return self._fallback()

    def _attempt(self) -> Optional[Puzzle]:
        start_slot = self.rng.choice(UPPER_SLOTS)
        start_twist = self.rng.randrange(3)
        num_moves = self.rng.randint(self.min_moves, self.max_moves)

        piece = int(start_slot)
        state = CubeState().with_piece(piece, start_twist)
        moves = Moves()
        prev_face = None
        for loop1 in range(num_moves):
            current = state[piece].slot
            faces = [
                face
                for face in Face
                if face != prev_face and Move(face.value).moves_slot(current)
            ]
            if not faces:
                return None

            face = self.rng.choice(faces)
            move = self.rng.choice(Move.of_face(face))
            moves.add(move)
            state = state.apply_move(move)
            prev_face = face

        final = state[piece]
        if final.slot not in UPPER_SLOTS:
            return None
        return Puzzle(start_slot, start_twist, moves, Solution(final.slot, final.twist))

    def _fallback(self) -> Puzzle:
        start_slot = self.rng.choice(UPPER_SLOTS)
        start_twist = self.rng.randrange(3)
        u_moves = Move.of_face(Face.U)
        moves = Moves([self.rng.choice(u_moves), self.rng.choice(u_moves)])
        return Puzzle(
            start_slot,
            start_twist,
            moves,
            track_corner(start_slot, start_twist, moves),
        )
