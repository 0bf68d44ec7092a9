# Goal and validator predicates for the CFOP stages
#
# Each predicate only looks at the slots its stage is responsible for:
#   cross      edges 4-7 (DF DR DB DL)
#   F2L        edges 8-11 (E slice) and corners 4-7 (D layer), plus the cross
#   last layer edges 0-3 and corners 0-3 (U layer)

from typing import Callable, Optional

import numpy as np

from .cube import SOLVED, CubeState, apply_moves

CROSS_EDGES = slice(4, 8)
SLOT_EDGES = slice(8, 12)
BOTTOM_CORNERS = slice(4, 8)
TOP_EDGES = slice(0, 4)
TOP_CORNERS = slice(0, 4)

# Top-face rotations tried by the matcher and the final adjustment, in order:
# 0, 1, 2 and 3 clockwise quarter turns
TOP_ROTATIONS = ("", "U", "U2", "U'")


def _edges_solved(state: CubeState, slots: slice) -> bool:
    return bool(np.array_equal(state.ep[slots], SOLVED.ep[slots]) and not state.eo[slots].any())


def _corners_solved(state: CubeState, slots: slice) -> bool:
    return bool(np.array_equal(state.cp[slots], SOLVED.cp[slots]) and not state.co[slots].any())


def is_cross_solved(state: CubeState) -> bool:
    return _edges_solved(state, CROSS_EDGES)


def pair_solved(edge: int, corner: int) -> Callable[[CubeState], bool]:
    """Goal for one F2L pair: the edge and the corner both home and oriented."""
    def is_pair_solved(state: CubeState) -> bool:
        return bool(
            state.ep[edge] == edge and state.eo[edge] == 0
            and state.cp[corner] == corner and state.co[corner] == 0
        )
    return is_pair_solved


def is_f2l_solved(state: CubeState) -> bool:
    return (
        is_cross_solved(state)
        and _edges_solved(state, SLOT_EDGES)
        and _corners_solved(state, BOTTOM_CORNERS)
    )


def is_top_cross_oriented(state: CubeState) -> bool:
    return not state.eo[TOP_EDGES].any()


def are_top_corners_oriented(state: CubeState) -> bool:
    return not state.co[TOP_CORNERS].any()


def is_oll_solved(state: CubeState) -> bool:
    return is_f2l_solved(state) and is_top_cross_oriented(state) and are_top_corners_oriented(state)


def find_top_rotation(state: CubeState, predicate: Callable[[CubeState], bool]) -> Optional[str]:
    """First top-face rotation (from TOP_ROTATIONS) after which predicate holds."""
    for rotation in TOP_ROTATIONS:
        if predicate(apply_moves(state, rotation)):
            return rotation
    return None


def _top_layer_permuted(state: CubeState) -> bool:
    return (
        np.array_equal(state.ep[TOP_EDGES], SOLVED.ep[TOP_EDGES])
        and np.array_equal(state.cp[TOP_CORNERS], SOLVED.cp[TOP_CORNERS])
    )


def is_pll_solved(state: CubeState) -> bool:
    """Oriented last layer whose pieces are in place up to a top-face rotation."""
    return is_oll_solved(state) and find_top_rotation(state, _top_layer_permuted) is not None


def is_solved_up_to_auf(state: CubeState) -> bool:
    return find_top_rotation(state, lambda s: s == SOLVED) is not None
