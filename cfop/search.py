import time
from typing import Callable, Dict, List, Optional, Sequence

from .cube import CubeState, apply_move

Predicate = Callable[[CubeState], bool]


def bfs_search(
    start: CubeState,
    is_goal: Predicate,
    max_depth: int,
    moves: Sequence[str],
    validator: Optional[Predicate] = None,
    metrics: Optional[Dict] = None,
) -> Optional[List[str]]:
    """Breadth-first search for the shortest move sequence reaching a goal.

    The search runs level by level, so the first sequence found is a
    shortest one. Within a level, frontier states are expanded in the order
    they were discovered and moves in the order given, which makes the
    result reproducible for identical input.

    A successor that satisfies the goal is returned right away, before the
    validator is consulted. Other successors only join the next level if the
    validator accepts them and they have not been seen before.

    Args:
        start: State to search from
        is_goal: Goal predicate
        max_depth: Maximum sequence length
        moves: Move alphabet (duplicates are ignored)
        validator: Optional predicate pruning states that break earlier work
        metrics: Optional dict that receives search statistics

    Returns:
        List of moves, empty if start is already a goal state, or None if no
        goal state is reachable within max_depth.
    """
    if metrics is None:
        metrics = {}
    metrics.update({
        "nodes_expanded": 0,
        "nodes_generated": 0,
        "max_frontier": 1,
        "depth_reached": 0,
        "time_seconds": 0,
    })
    start_time = time.time()

    if is_goal(start):
        return []

    alphabet = list(dict.fromkeys(moves))
    frontier = [(start, [])]
    visited = {start.fingerprint()}

    try:
        for depth in range(1, max_depth + 1):
            metrics["depth_reached"] = depth
            next_frontier = []
            for state, path in frontier:
                metrics["nodes_expanded"] += 1
                for move in alphabet:
                    new_state = apply_move(state, move)
                    metrics["nodes_generated"] += 1

                    if is_goal(new_state):
                        return path + [move]

                    if validator is not None and not validator(new_state):
                        continue

                    key = new_state.fingerprint()
                    if key in visited:
                        continue
                    visited.add(key)
                    next_frontier.append((new_state, path + [move]))

            frontier = next_frontier
            metrics["max_frontier"] = max(metrics["max_frontier"], len(frontier))
            if not frontier:
                break
    finally:
        metrics["time_seconds"] = time.time() - start_time

    return None
