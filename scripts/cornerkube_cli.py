#!/usr/bin/env python3
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
Create a command line interface to train corner look-ahead.

The CLI shows a corner of the upper layer, its twist and a short move
sequence; you answer where that corner ends up and how it is twisted.

Usage :
    python scripts/cornerkube_cli.py [--seed N] [--log-level LEVEL]

Documented commands (type help <topic>):
========================================
answer  debug_level  new         quit    reset     selftest  track
apply   help         print_cube  reveal  score
"""
from typing import List, Optional
import argparse
import cmd
import logging
import random

import cornerkube

# Setup logger
logging.basicConfig()
logger = logging.getLogger("cornerkube_cli")

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


# ------------------------------------------------
# Main Command line interface for the trainer
# ------------------------------------------------
class cornerkube_cli(cmd.Cmd):
    """Define the main command line interface (CLI) for the trainer."""

    prompt = "CORNERS> "

    def __init__(self, rng: Optional[random.Random] = None, **kwargs):
        """Initialize the CLI with a puzzle generator and a scratch cube."""
        cmd.Cmd.__init__(self, **kwargs)
        self.generator = cornerkube.PuzzleGenerator(rng=rng)
        self.puzzle = None
        self.answered = False
        self.correct = 0
        self.total = 0
        self.state = cornerkube.CubeState()

    # ----------------------------------------------------
    # Helper functions for the CLI
    # ----------------------------------------------------
    def check_puzzle(self) -> bool:
        """
        Check if a puzzle is waiting for an answer.

        :returns: the puzzle status. Log a warning message if no.
        :rtype: bool
        """
        if self.puzzle is not None and not self.answered:
            return True
        else:
            logger.warning("No open puzzle, run new first")
            return False

    def emptyline(self) -> bool:
        """Do nothing on an empty line instead of repeating the last one."""
        return False

    # ----------------------------------------------------
    # CLI commands
    # ----------------------------------------------------
    def do_new(self, args) -> None:
        """Generate a new puzzle and show the corner to follow."""
        self.puzzle = self.generator.generate()
        self.answered = False
        print(
            f"Follow {self.puzzle.start_slot.label} "
            f"(twist {self.puzzle.start_twist}) through: {self.puzzle.moves}"
        )

    def do_answer(self, args) -> None:
        """
        Answer the current puzzle.

        Usage:
            answer SLOT TWIST

        CORNERS> answer URF 1
        Correct! (3/4)
        """
        if not self.check_puzzle():
            return
        parts = args.split()
        if len(parts) != 2:
            logger.error("Usage: answer SLOT TWIST")
            return
        try:
            slot = cornerkube.Slot.parse(parts[0])
            twist = cornerkube.parse_twist(parts[1])
        except (ValueError, cornerkube.CubeError) as e:
            logger.error(f"Bad answer {args!r}: {e}")
            return

        is_correct = self.puzzle.check(slot, twist)
        logger.info(
            f"Answer {slot.label}/{twist}, expected "
            f"{self.puzzle.solution.slot.label}/{self.puzzle.solution.twist}"
        )
        self.answered = True
        self.total += 1
        if is_correct:
            self.correct += 1
            print(f"Correct! ({self.correct}/{self.total})")
        else:
            print(
                f"Incorrect - it was {self.puzzle.solution.slot.label} "
                f"twist {self.puzzle.solution.twist} ({self.correct}/{self.total})"
            )

    def complete_answer(self, text, line, begidx, endidx) -> List[str]:
        """List the upper slots, possibly starting with `text`."""
        labels = [slot.label for slot in cornerkube.UPPER_SLOTS]
        return [f for f in labels if f.startswith(text.upper())]

    def do_reveal(self, args) -> None:
        """Show the solution of the current puzzle."""
        if self.puzzle is None:
            logger.warning("No puzzle yet, run new first")
            return
        print(
            f"{self.puzzle} -> {self.puzzle.solution.slot.label} "
            f"twist {self.puzzle.solution.twist}"
        )
        self.answered = True

    def do_score(self, args) -> None:
        """Report the answers given in this session."""
        print(f"Score: {self.correct}/{self.total}")

    def do_track(self, args) -> None:
        """
        Follow a corner through a sequence of moves.

        Usage:
            track SLOT TWIST MOVES...

        CORNERS> track ULB 2 B' U'
        ULB twist 0
        """
        parts = args.split()
        if len(parts) < 2:
            logger.error("Usage: track SLOT TWIST MOVES...")
            return
        try:
            result = cornerkube.track_corner(
                parts[0],
                cornerkube.parse_twist(parts[1]),
                cornerkube.Moves(" ".join(parts[2:])),
            )
        except (ValueError, cornerkube.CubeError) as e:
            logger.error(f"Cannot track {args!r}: {e}")
            return
        print(f"{result.slot.label} twist {result.twist}")

    def do_apply(self, args) -> None:
        """
        Apply moves to the scratch cube and print it.

        Usage:
            apply [U|D|R|L|F|B]['|2] ...
        """
        try:
            moves = cornerkube.Moves(args)
        except cornerkube.InvalidMoveError as e:
            logger.error(e)
            return
        self.state = self.state.apply_moves(moves)
        print(self.state)

    def do_reset(self, args) -> None:
        """Reset the scratch cube to the solved state."""
        self.state = cornerkube.CubeState()

    def do_print_cube(self, args) -> None:
        """Print the scratch cube."""
        print(self.state)

    def do_selftest(self, args) -> None:
        """Run the move consistency checks."""
        failures = cornerkube.run_self_test()
        if failures:
            for failure in failures:
                print(failure)
        else:
            print("All cube move identity tests passed")

    def complete_debug_level(self, text, line, begidx, endidx) -> List[str]:
        """List all debug level, possibly starting with `text`."""
        if not text:
            return list(LOG_LEVELS)
        return [f for f in LOG_LEVELS if f.startswith(text)]

    def do_debug_level(self, args) -> None:
        """
        Set the level of debug info to provide across all the components.

        Usage:
            debug_level [debug | info | warning | error ]
        """
        level = LOG_LEVELS.get(args.strip())
        if level is None:
            logger.error(f"Unknown debug level {args!r}")
            return
        set_log_level(level)

    def do_quit(self, args) -> bool:
        """Exit the trainer command line interface.

        :returns: True once exit
        :rtype: bool
        """
        print(f"Final score: {self.correct}/{self.total}")
        return True

    def help_quit(self):
        """Log help to quit the current CLI."""
        print("syntax: quit")


def set_log_level(level: int) -> None:
    """Set the level of every trainer logger."""
    for name in ["cornerkube", "cornerkube.puzzle", "cornerkube_cli"]:
        logging.getLogger(name).setLevel(level)


def main(argv: Optional[List[str]] = None) -> None:
    """Start the trainer command line interface and run the CLI loop."""
    parser = argparse.ArgumentParser(description="Corner look-ahead trainer")
    parser.add_argument("--seed", type=int, help="seed for puzzle generation")
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="warning",
        help="logging level for all the components",
    )
    args = parser.parse_args(argv)
    set_log_level(LOG_LEVELS[args.log_level])

    print("Starting corner look-ahead trainer (type help for commands)")

    # Allocate the CLI
    cli = cornerkube_cli(rng=random.Random(args.seed))

    # Run the CLI loop
    cli.cmdloop()


if __name__ == "__main__":
    main()
