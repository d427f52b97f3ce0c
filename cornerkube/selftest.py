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
"""Move consistency checks that can be run from the CLI."""

from typing import Dict, List
import logging

from cornerkube.cornerkube import CubeState, Move, Moves, Slot, make_piece
from cornerkube.puzzle import track_corner

logger = logging.getLogger("cornerkube")

# Expected slot -> slot mapping of a single move from the solved cube
CYCLE_CASES: Dict[str, Dict[int, int]] = {
    "U": {0: 1, 1: 2, 2: 3, 3: 0},
    "U'": {0: 3, 1: 0, 2: 1, 3: 2},
    "B'": {1: 6, 6: 7, 7: 0, 0: 1},
}

# start slot, start twist, moves, expected slot, expected twist
SCENARIO_CASES = [
    (Slot.ULB, 2, "B' U'", Slot.ULB, 0),
]


def run_self_test() -> List[str]:
    """
    Run the move consistency checks.

    For every move and every starting twist of all 8 pieces, check that
    the move followed by its inverse, and the move repeated 4 times (2 for
    half turns), give back the starting state. Then check the known slot
    cycles and scenarios.

    :returns: A description of each failed check, empty if all pass.
    :rtype: List[str]
    """
    failures = list()

    for initial_twist in (0, 1, 2):
        base = CubeState([make_piece(slot, initial_twist) for slot in Slot])
        for move in Move:
            back = base.apply_moves([move, move.inverse])
            if back != base:
                failures.append(
                    f"Fail: {move} + {move.inverse} (start twist {initial_twist})"
                )

            times = 2 if move.is_half_turn else 4
            around = base.apply_moves([move] * times)
            if around != base:
                failures.append(f"Fail: {move} * {times} (start twist {initial_twist})")

    solved = CubeState()
    for move_str, expected in CYCLE_CASES.items():
        after = solved.apply_moves(move_str)
        for start, end in expected.items():
            occupant = after.piece_at_slot(end)
            if occupant is None or occupant.piece != start:
                failures.append(
                    f"Cycle fail {move_str} slot {start} -> expected {end}"
                )

    for start_slot, start_twist, move_str, end_slot, end_twist in SCENARIO_CASES:
        result = track_corner(start_slot, start_twist, Moves(move_str))
        if result != (end_slot, end_twist):
            failures.append(
                f"Scenario {move_str} expected {end_slot.label} twist {end_twist} "
                f"but got {result.slot.label} twist {result.twist}"
            )

    if failures:
        logger.warning(f"Self test failures: {failures}")
    else:
        logger.info("All cube move identity tests passed")
    return failures
