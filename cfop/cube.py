# Cubie-level model of the 3x3x3 cube
#
# A state is two orbits:
#   edges:   12 slots, piece permutation ep, orientation eo (mod 2)
#   corners:  8 slots, piece permutation cp, orientation co (mod 3)
#
# Slot order:
#   edges   UF UR UB UL DF DR DB DL FR FL BR BL
#   corners URF UBR ULB UFL DFR DLF DBL DRB
#
# Orientation 0 means the piece's U/D sticker (or, for E-slice edges, its
# F/B sticker) points the same way as in the solved cube. F and B quarter
# turns flip edges; R, L, F, B quarter turns twist corners.

from dataclasses import dataclass
from typing import Dict

import numpy as np

from .notation import MOVES, MoveParseError, MoveSeq, expand_moves, parse_move

EDGES = ["UF", "UR", "UB", "UL", "DF", "DR", "DB", "DL", "FR", "FL", "BR", "BL"]
CORNERS = ["URF", "UBR", "ULB", "UFL", "DFR", "DLF", "DBL", "DRB"]
EDGE_IDX = {name: idx for idx, name in enumerate(EDGES)}
CORNER_IDX = {name: idx for idx, name in enumerate(CORNERS)}
NUM_EDGES = len(EDGES)
NUM_CORNERS = len(CORNERS)

# Clockwise quarter turns: target slot <- (source slot, orientation change)
_EDGE_TURNS = {
    "U": {"UF": ("UR", 0), "UL": ("UF", 0), "UB": ("UL", 0), "UR": ("UB", 0)},
    "D": {"DR": ("DF", 0), "DF": ("DL", 0), "DL": ("DB", 0), "DB": ("DR", 0)},
    "R": {"UR": ("FR", 0), "DR": ("BR", 0), "FR": ("DR", 0), "BR": ("UR", 0)},
    "L": {"UL": ("BL", 0), "DL": ("FL", 0), "FL": ("UL", 0), "BL": ("DL", 0)},
    "F": {"UF": ("FL", 1), "DF": ("FR", 1), "FR": ("UF", 1), "FL": ("DF", 1)},
    "B": {"UB": ("BR", 1), "DB": ("BL", 1), "BL": ("UB", 1), "BR": ("DB", 1)},
}
_CORNER_TURNS = {
    "U": {"URF": ("UBR", 0), "UFL": ("URF", 0), "ULB": ("UFL", 0), "UBR": ("ULB", 0)},
    "D": {"DFR": ("DLF", 0), "DLF": ("DBL", 0), "DBL": ("DRB", 0), "DRB": ("DFR", 0)},
    "R": {"URF": ("DFR", 2), "UBR": ("URF", 1), "DFR": ("DRB", 1), "DRB": ("UBR", 2)},
    "L": {"UFL": ("ULB", 1), "ULB": ("DBL", 2), "DLF": ("UFL", 2), "DBL": ("DLF", 1)},
    "F": {"URF": ("UFL", 1), "UFL": ("DLF", 2), "DFR": ("URF", 2), "DLF": ("DFR", 1)},
    "B": {"ULB": ("UBR", 1), "UBR": ("DRB", 2), "DBL": ("ULB", 2), "DRB": ("DBL", 1)},
}


def _frozen(values, dtype=np.int8) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class CubeState:
    """Immutable cube state. Moves never modify a state, they return a new one."""

    ep: np.ndarray
    eo: np.ndarray
    cp: np.ndarray
    co: np.ndarray

    def __post_init__(self):
        for name, size in (("ep", NUM_EDGES), ("eo", NUM_EDGES), ("cp", NUM_CORNERS), ("co", NUM_CORNERS)):
            arr = getattr(self, name)
            if not isinstance(arr, np.ndarray) or arr.dtype != np.int8 or arr.flags.writeable:
                arr = _frozen(arr)
                object.__setattr__(self, name, arr)
            if arr.shape != (size,):
                raise ValueError(f"{name} must have {size} entries, got shape {arr.shape}")

    @classmethod
    def solved(cls) -> "CubeState":
        return cls(
            ep=np.arange(NUM_EDGES),
            eo=np.zeros(NUM_EDGES),
            cp=np.arange(NUM_CORNERS),
            co=np.zeros(NUM_CORNERS),
        )

    def fingerprint(self) -> bytes:
        """Canonical key used by the search's visited set."""
        return np.concatenate([self.ep, self.eo, self.cp, self.co]).tobytes()

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return self.fingerprint() == other.fingerprint()

    def __hash__(self):
        return hash(self.fingerprint())

    def __repr__(self):
        return (
            f"CubeState(ep={self.ep.tolist()}, eo={self.eo.tolist()}, "
            f"cp={self.cp.tolist()}, co={self.co.tolist()})"
        )

    def apply(self, transform: "CubeState") -> "CubeState":
        """Apply another state's permutation and orientation delta to this one."""
        return CubeState(
            ep=self.ep[transform.ep],
            eo=(self.eo[transform.ep] + transform.eo) % 2,
            cp=self.cp[transform.cp],
            co=(self.co[transform.cp] + transform.co) % 3,
        )


SOLVED = CubeState.solved()


def _quarter_turn(face: str) -> CubeState:
    ep, eo = list(range(NUM_EDGES)), [0] * NUM_EDGES
    for target, (source, flip) in _EDGE_TURNS[face].items():
        ep[EDGE_IDX[target]] = EDGE_IDX[source]
        eo[EDGE_IDX[target]] = flip
    cp, co = list(range(NUM_CORNERS)), [0] * NUM_CORNERS
    for target, (source, twist) in _CORNER_TURNS[face].items():
        cp[CORNER_IDX[target]] = CORNER_IDX[source]
        co[CORNER_IDX[target]] = twist
    return CubeState(ep=ep, eo=eo, cp=cp, co=co)


def _build_move_table() -> Dict[str, CubeState]:
    table = {}
    for move in MOVES:
        face, turns = parse_move(move)
        quarter = _quarter_turn(face)
        transform = quarter
        for _ in range(turns - 1):
            transform = transform.apply(quarter)
        table[move] = transform
    return table


# Move name -> transformation, for the 18 face turns
MOVE_TABLE: Dict[str, CubeState] = _build_move_table()


def apply_move(state: CubeState, move: str) -> CubeState:
    """Apply a single face turn (one of the 18 in MOVES)."""
    try:
        transform = MOVE_TABLE[move]
    except KeyError:
        raise MoveParseError(f"Not a face turn: {move!r}") from None
    return state.apply(transform)


def apply_moves(state: CubeState, moves: MoveSeq) -> CubeState:
    """Apply a move sequence. Rotations, slices and wide turns (x, M, r) are expanded first."""
    for move in expand_moves(moves):
        state = apply_move(state, move)
    return state


def is_solved(state: CubeState) -> bool:
    return state == SOLVED
