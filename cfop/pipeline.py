"""
CFOP stage pipeline.

Solves a cube the way a person following the CFOP method would:

1. Cross          - bottom edges, breadth-first search over all 18 moves
2. F2L 1-4        - one corner/edge pair at a time, keeping the cross intact
3. OLL (Cross)    - orient the top edges with a small move set
4. OLL (Corners)  - orient the top corners, library first, search as fallback
5. PLL            - permute the last layer, library first, search as fallback
6. AUF            - final top-face turn

Stages run strictly in order and never backtrack. Only a Cross failure stops
the pipeline; any later failure is reported on its own step and the next
stage starts from the unchanged state.
"""

from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel

from .algorithms import OLL_ALGORITHMS, PLL_ALGORITHMS, match_algorithm
from .cube import SOLVED, CubeState, apply_moves
from .notation import MOVES, expand_moves, format_moves
from .search import bfs_search
from .stages import (
    are_top_corners_oriented,
    find_top_rotation,
    is_cross_solved,
    is_f2l_solved,
    is_oll_solved,
    is_pll_solved,
    is_solved_up_to_auf,
    is_top_cross_oriented,
    pair_solved,
)

ALREADY_SOLVED = "Already Solved"
CROSS_FAILED = "Cross search failed. Solve cross manually first."
SEARCH_FAILED = "Search failed (too complex)"
NOT_SOLVED = "Cube not solved after the last layer"


class F2LSlot(BaseModel):
    name: str
    edge: int
    corner: int


class SolverConfig(BaseModel):
    moves: List[str] = list(MOVES)
    cross_depth: int = 6

    f2l_pairs: List[F2LSlot] = [
        F2LSlot(name="F2L 1 (FR)", edge=8, corner=4),
        F2LSlot(name="F2L 2 (FL)", edge=9, corner=5),
        F2LSlot(name="F2L 3 (BL)", edge=11, corner=6),
        F2LSlot(name="F2L 4 (BR)", edge=10, corner=7),
    ]
    f2l_depth: int = 8

    oll_cross_moves: List[str] = ["F", "R", "U", "R'", "U'", "F'"]
    oll_cross_depth: int = 6
    oll_moves: List[str] = ["R", "U", "R'", "U'", "L", "L'", "B", "F"]
    oll_depth: int = 8
    pll_moves: List[str] = ["R2", "U", "R", "R'", "U'"]
    pll_depth: int = 14

    oll_library: List[Tuple[str, str]] = list(OLL_ALGORITHMS)
    pll_library: List[Tuple[str, str]] = list(PLL_ALGORITHMS)

    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str) -> "SolverConfig":
        """Load a config; keys missing from the file keep their defaults."""
        with open(path, "r") as f:
            overrides = yaml.safe_load(f) or {}
        return cls(**overrides)


class SolveStep(BaseModel):
    name: str
    moves: str
    algorithm: Optional[str] = None
    failed: bool = False

    @property
    def playable(self) -> bool:
        return not self.failed and self.moves != ALREADY_SOLVED


def _search_step(name: str, moves: Optional[List[str]]) -> SolveStep:
    if moves is None:
        return SolveStep(name=name, moves=SEARCH_FAILED, failed=True)
    return SolveStep(name=name, moves=format_moves(moves) if moves else ALREADY_SOLVED)


def _log(config: SolverConfig, step: SolveStep):
    if config.verbose:
        print(f"  {step.name}: {step.moves}")


def solve_cfop(state: CubeState, config: Optional[SolverConfig] = None) -> List[SolveStep]:
    """Solve a cube stage by stage.

    Args:
        state: Scrambled cube state
        config: Search depths, move sets and algorithm libraries

    Returns:
        One SolveStep per attempted stage. A single "Error" step if the cross
        cannot be found.
    """
    if config is None:
        config = SolverConfig()
    steps = []

    # 1. Cross
    cross = bfs_search(state, is_cross_solved, config.cross_depth, config.moves)
    if cross is None:
        step = SolveStep(name="Error", moves=CROSS_FAILED, failed=True)
        _log(config, step)
        return [step]
    steps.append(_search_step("Cross", cross))
    _log(config, steps[-1])
    state = apply_moves(state, cross)

    # 2. F2L pairs, intermediate states keep the cross
    for slot in config.f2l_pairs:
        pair = bfs_search(
            state, pair_solved(slot.edge, slot.corner),
            config.f2l_depth, config.moves,
            validator=is_cross_solved,
        )
        steps.append(_search_step(slot.name, pair))
        _log(config, steps[-1])
        if pair is not None:
            state = apply_moves(state, pair)

    # 3. OLL, top edges first
    if not is_top_cross_oriented(state):
        oll_cross = bfs_search(
            state, is_top_cross_oriented, config.oll_cross_depth, config.oll_cross_moves,
            validator=is_f2l_solved,
        )
        steps.append(_search_step("OLL (Cross)", oll_cross))
        _log(config, steps[-1])
        if oll_cross is not None:
            state = apply_moves(state, oll_cross)

    # 4. OLL, top corners
    if not is_oll_solved(state):
        match = match_algorithm(
            state, config.oll_library, are_top_corners_oriented,
            lambda s: is_f2l_solved(s) and is_top_cross_oriented(s),
        )
        if match is not None:
            steps.append(SolveStep(name=f"OLL ({match.name})", moves=match.moves, algorithm=match.name))
            state = apply_moves(state, match.moves)
        else:
            oll = bfs_search(
                state, is_oll_solved, config.oll_depth, config.oll_moves,
                validator=is_f2l_solved,
            )
            steps.append(_search_step("OLL (Search)", oll))
            if oll is not None:
                state = apply_moves(state, oll)
        _log(config, steps[-1])

    # 5. PLL
    if not is_solved_up_to_auf(state):
        match = match_algorithm(state, config.pll_library, is_solved_up_to_auf, is_oll_solved)
        if match is not None:
            steps.append(SolveStep(name=f"PLL ({match.name})", moves=match.moves, algorithm=match.name))
            state = apply_moves(state, match.moves)
        else:
            pll = bfs_search(
                state, is_pll_solved, config.pll_depth, config.pll_moves,
                validator=is_oll_solved,
            )
            steps.append(_search_step("PLL (Search)", pll))
            if pll is not None:
                state = apply_moves(state, pll)
        _log(config, steps[-1])

    # 6. AUF
    auf = find_top_rotation(state, lambda s: s == SOLVED)
    if auf is None:
        steps.append(SolveStep(name="AUF", moves=NOT_SOLVED, failed=True))
        _log(config, steps[-1])
    elif auf:
        steps.append(SolveStep(name="AUF", moves=auf))
        _log(config, steps[-1])

    return steps


def flatten_moves(steps: List[SolveStep]) -> List[str]:
    """All face turns of a solution, in playback order.

    Each step is expanded on its own, so a rotation or slice move inside one
    algorithm never changes how the following steps are read.
    """
    moves = []
    for step in steps:
        if step.playable:
            moves.extend(expand_moves(step.moves))
    return moves


def describe_steps(steps: List[SolveStep]) -> str:
    return "\n".join(f"{step.name}: {step.moves}" for step in steps)
