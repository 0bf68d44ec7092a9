# Named last-layer algorithms and the matcher that probes them
#
# Libraries are ordered lists of (name, sequence); the first entry that works
# wins, so order is priority. The sequences are kept exactly as published,
# including rotations and slice moves, and are expanded when applied.

from typing import List, NamedTuple, Optional, Sequence, Tuple

from .cube import CubeState, apply_moves
from .notation import MoveParseError, expand_moves
from .search import Predicate
from .stages import TOP_ROTATIONS

Library = Sequence[Tuple[str, str]]

PLL_ALGORITHMS: List[Tuple[str, str]] = [
    ("T-Perm", "R U R' U' R' F R2 U' R' U' R U R' F'"),
    ("Ua-Perm", "R2 U R U R' U' R' U' R' U R'"),
    ("Ub-Perm", "R U' R U R U R U' R' U' R2"),
    ("Aa-Perm", "x R' U R' D2 R U' R' D2 R2"),
    ("Ab-Perm", "x R2 D2 R U R' D2 R U' R"),
    ("H-Perm", "M2 U M2 U2 M2 U M2"),
    ("Z-Perm", "M' U M2 U M2 U M' U2 M2"),
    ("Y-Perm", "F R U' R' U' R U R' F' R U R' U' R' F R F'"),
    ("J-Perm", "R U R' F' R U R' U' R' F R2 U' R'"),
    ("F-Perm", "R' U' F' R U R' U' R' F R2 U' R' U' R U R' U R"),
]

OLL_ALGORITHMS: List[Tuple[str, str]] = [
    ("Sune", "R U R' U R U2 R'"),
    ("Antisune", "R U2 R' U' R U' R'"),
    ("T-OLL", "F R U R' U' F'"),
    ("U-OLL", "R2 D R' U2 R D' R' U2 R'"),
    ("L-OLL", "F R' F' r U R U' r'"),
]


class AlgorithmMatch(NamedTuple):
    name: str
    moves: str


def parse_library(library: Library) -> List[str]:
    """Names of the entries the matcher would skip because they do not parse."""
    broken = []
    for name, sequence in library:
        try:
            expand_moves(sequence)
        except MoveParseError:
            broken.append(name)
    return broken


def match_algorithm(
    state: CubeState,
    library: Library,
    goal: Predicate,
    validator: Predicate,
) -> Optional[AlgorithmMatch]:
    """Find the first library entry that takes state to the goal.

    Every top-face pre-rotation is tried in TOP_ROTATIONS order, and within
    each rotation the entries in library order. Entries that fail to parse
    are skipped.

    Returns:
        AlgorithmMatch with the entry name and the full applied sequence
        (rotation prefix followed by the entry), or None if nothing matches
    """
    for rotation in TOP_ROTATIONS:
        rotated = apply_moves(state, rotation)
        for name, sequence in library:
            try:
                result = apply_moves(rotated, sequence)
            except MoveParseError:
                continue
            if goal(result) and validator(result):
                moves = f"{rotation} {sequence}" if rotation else sequence
                return AlgorithmMatch(name, moves)
    return None
