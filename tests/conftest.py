import importlib.util
import pathlib

import pytest

from cornerkube import CubeState, Move

ROOT = pathlib.Path(__file__).resolve().parent.parent


def explore(seeds, depth):
    """Breadth-first set of states reachable from the seeds within depth moves."""
    seen = set(seeds)
    frontier = list(seeds)
    for _ in range(depth):
        next_frontier = []
        for state in frontier:
            for move in Move:
                after = state.apply_move(move)
                if after not in seen:
                    seen.add(after)
                    next_frontier.append(after)
        frontier = next_frontier
    return list(seen)


@pytest.fixture(scope="session")
def seed_states():
    solved = CubeState()
    return [solved, solved.with_piece(0, 1), solved.with_piece(3, 2)]


@pytest.fixture(scope="session")
def reachable_states(seed_states):
    return explore(seed_states, 2)


@pytest.fixture(scope="session")
def deep_states():
    return explore([CubeState()], 3)


@pytest.fixture
def cli_module():
    path = ROOT / "scripts" / "cornerkube_cli.py"
    spec = importlib.util.spec_from_file_location("cornerkube_cli", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
