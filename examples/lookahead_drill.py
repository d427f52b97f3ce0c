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
"""Corner look-ahead drill.

The script shows a corner of the upper layer and a short move sequence,
then asks the player where the corner lands and how it is twisted.

Twist 0 means the corner's top sticker is still on top, twist 1 that it
turned to the front or back side, twist 2 to the left or right side.

Usage:
    python3 lookahead_drill.py
"""
import cornerkube

generator = cornerkube.PuzzleGenerator()
correct = 0
total = 0

# ----------------------------------------------------
# Run the main loop, and catch keyboard exceptions
# ---------------------------------------------------
try:
    while True:
        puzzle = generator.generate()
        print(f"\nStart: {puzzle.start_slot.label} twist {puzzle.start_twist}")
        print(f"Moves: {puzzle.moves}")

        # Ask until the answer can be read
        while True:
            response = input("Where does it end up [SLOT TWIST, or q]?: ").split()
            if response and response[0] == "q":
                raise KeyboardInterrupt
            try:
                slot = cornerkube.Slot.parse(response[0])
                twist = cornerkube.parse_twist(response[1])
                break
            except (IndexError, ValueError):
                print("Answer with a slot such as URF and a twist 0, 1 or 2")

        total += 1
        if puzzle.check(slot, twist):
            correct += 1
            print(f"Correct! ({correct}/{total})")
        else:
            answer = puzzle.solution
            print(f"It was {answer.slot.label} twist {answer.twist} ({correct}/{total})")

# Handling exceptions and breakout
except (KeyboardInterrupt, EOFError):
    print(f"\nExiting with {correct}/{total}")
