# Move notation for the 3x3x3 cube
#
# Face turns: U, D, L, R, F, B with modifier '' (clockwise), "'" (counter-clockwise)
# or '2' (half turn). Sequences are whitespace separated tokens.
#
# Extended notation (rotations x y z, slices M E S, wide turns r / Rw) is
# resolved into plain face turns by expand_moves, so the cube state never
# needs center pieces.

from typing import Dict, Iterable, List, Tuple, Union

FACES = ["U", "D", "L", "R", "F", "B"]
MODIFIERS = {"": 1, "2": 2, "'": 3}
SUFFIXES = {1: "", 2: "2", 3: "'"}

# All 18 face turns, in the order searches iterate them
MOVES = [face + suffix for face in FACES for suffix in ("", "'", "2")]

MoveSeq = Union[str, Iterable[str]]


class MoveParseError(ValueError):
    """Raised for a token that is not valid cube notation."""


def _split_token(token: str) -> Tuple[str, int]:
    token = token.strip()
    if not token:
        raise MoveParseError("empty move token")
    base, modifier = token[0], token[1:]
    # Rw / Rw' / Rw2 is the same as r
    if modifier.startswith("w"):
        if base not in FACES:
            raise MoveParseError(f"Unsupported move: {token}")
        base, modifier = base.lower(), modifier[1:]
    if modifier not in MODIFIERS:
        raise MoveParseError(f"Unsupported modifier: {token}")
    return base, MODIFIERS[modifier]


def parse_move(token: str) -> Tuple[str, int]:
    """Parse a face turn into (face, clockwise quarter turns)."""
    base, turns = _split_token(token)
    if base not in FACES:
        raise MoveParseError(f"Unsupported move: {token}")
    return base, turns


def make_move(face: str, turns: int) -> str:
    turns %= 4
    if turns == 0:
        raise ValueError("a move needs a non-zero number of turns")
    return face + SUFFIXES[turns]


def split_moves(moves: MoveSeq) -> List[str]:
    if isinstance(moves, str):
        return moves.split()
    return [m.strip() for m in moves if m.strip()]


def format_moves(moves: Iterable[str]) -> str:
    return " ".join(moves)


def invert_move(token: str) -> str:
    base, turns = _split_token(token)
    return base + SUFFIXES[4 - turns]


def invert_moves(moves: MoveSeq) -> List[str]:
    """Inverse of a sequence: reversed order, every token inverted.

    The sequence is expanded to face turns first, so the inverse of
    "x R' U" undoes it on the cube state even though x moves no pieces.
    """
    return [invert_move(m) for m in reversed(expand_moves(moves))]


# ============================================================================
# Extended notation
# ============================================================================

# Rotation x follows R, y follows U, z follows F.
# For each rotation: which face's content ends up in each position.
_ROTATION_CYCLES: Dict[str, Dict[str, str]] = {
    "x": {"U": "F", "B": "U", "D": "B", "F": "D"},
    "y": {"F": "R", "L": "F", "B": "L", "R": "B"},
    "z": {"U": "L", "R": "U", "D": "R", "L": "D"},
}

# Slice / wide moves as (face turns, rotation), per clockwise quarter turn.
# M follows L, E follows D, S follows F.
_COMPOSITES: Dict[str, Tuple[List[Tuple[str, int]], Tuple[str, int]]] = {
    "M": ([("L", 3), ("R", 1)], ("x", 3)),
    "E": ([("U", 1), ("D", 3)], ("y", 3)),
    "S": ([("F", 3), ("B", 1)], ("z", 1)),
    "r": ([("L", 1)], ("x", 1)),
    "l": ([("R", 1)], ("x", 3)),
    "u": ([("D", 1)], ("y", 1)),
    "d": ([("U", 1)], ("y", 3)),
    "f": ([("B", 1)], ("z", 1)),
    "b": ([("F", 1)], ("z", 3)),
}


def _rotate_frame(frame: Dict[str, str], axis: str, turns: int) -> Dict[str, str]:
    for _ in range(turns % 4):
        cycle = _ROTATION_CYCLES[axis]
        frame = {pos: frame[cycle.get(pos, pos)] for pos in FACES}
    return frame


def expand_moves(moves: MoveSeq) -> List[str]:
    """Resolve extended notation into the 18 face turns.

    `frame` maps each face letter, as seen by whoever is holding the cube,
    to the physical face it currently refers to. Rotations only update the
    frame; slices and wide turns are rewritten as face turns plus a rotation.

    Args:
        moves: Move text (e.g. "x R' U R' D2 R U' R' D2 R2") or a token list

    Returns:
        List of face turn tokens with the same effect on edges and corners

    Raises:
        MoveParseError: If a token is not valid notation
    """
    frame = {face: face for face in FACES}
    expanded = []
    for token in split_moves(moves):
        base, turns = _split_token(token)
        if base in FACES:
            expanded.append(make_move(frame[base], turns))
        elif base in _ROTATION_CYCLES:
            frame = _rotate_frame(frame, base, turns)
        elif base in _COMPOSITES:
            face_turns, (axis, axis_turns) = _COMPOSITES[base]
            for face, face_turn in face_turns:
                expanded.append(make_move(frame[face], face_turn * turns))
            frame = _rotate_frame(frame, axis, axis_turns * turns)
        else:
            raise MoveParseError(f"Unsupported move: {token}")
    return expanded
