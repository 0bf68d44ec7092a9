from .notation import (
    MOVES,
    MoveParseError,
    parse_move,
    split_moves,
    format_moves,
    invert_move,
    invert_moves,
    expand_moves,
)

from .cube import (
    CubeState,
    SOLVED,
    EDGES,
    CORNERS,
    apply_move,
    apply_moves,
    is_solved,
)

from .search import bfs_search

from .stages import (
    TOP_ROTATIONS,
    find_top_rotation,
    is_cross_solved,
    pair_solved,
    is_f2l_solved,
    is_top_cross_oriented,
    are_top_corners_oriented,
    is_oll_solved,
    is_pll_solved,
    is_solved_up_to_auf,
)

from .algorithms import (
    OLL_ALGORITHMS,
    PLL_ALGORITHMS,
    AlgorithmMatch,
    match_algorithm,
    parse_library,
)

from .pipeline import (
    SolverConfig,
    SolveStep,
    F2LSlot,
    solve_cfop,
    flatten_moves,
    describe_steps,
)

__all__ = [
    'MOVES',
    'MoveParseError',
    'parse_move',
    'split_moves',
    'format_moves',
    'invert_move',
    'invert_moves',
    'expand_moves',
    'CubeState',
    'SOLVED',
    'EDGES',
    'CORNERS',
    'apply_move',
    'apply_moves',
    'is_solved',
    'bfs_search',
    'TOP_ROTATIONS',
    'find_top_rotation',
    'is_cross_solved',
    'pair_solved',
    'is_f2l_solved',
    'is_top_cross_oriented',
    'are_top_corners_oriented',
    'is_oll_solved',
    'is_pll_solved',
    'is_solved_up_to_auf',
    'OLL_ALGORITHMS',
    'PLL_ALGORITHMS',
    'AlgorithmMatch',
    'match_algorithm',
    'parse_library',
    'SolverConfig',
    'SolveStep',
    'F2LSlot',
    'solve_cfop',
    'flatten_moves',
    'describe_steps',
]
