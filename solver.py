"""
CFOP solver for the 3x3x3 cube.

Applies a scramble to a solved cube, solves it stage by stage (Cross, F2L,
OLL, PLL, AUF) and double-checks every solution on an independent magiccube
model.

Usage:
    python solver.py --scramble "R U R' U R U2 R'"
    python solver.py --scramble_file scrambles.txt --num_workers 4
    python solver.py --scramble "F R" --solver_config solver.yaml
"""

import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional

import magiccube
from argdantic import ArgParser
from pydantic import BaseModel
from tqdm import tqdm

import cfop

cli = ArgParser()


class SolveConfig(BaseModel):
    scramble: str = ""
    scramble_file: Optional[str] = None  # one scramble per line, '#' starts a comment
    solver_config: Optional[str] = None  # YAML file with SolverConfig overrides

    num_workers: int = 1
    verify: bool = True
    verbose: bool = False


def get_cube_state_str(cube: magiccube.Cube) -> str:
    return str(cube).replace(" ", "").replace("\n", "")


SOLVED_STATE = get_cube_state_str(magiccube.Cube(3))


def verify_solution(scramble: str, solution: List[str]) -> bool:
    """Replay scramble and solution on a magiccube.Cube and check it is solved."""
    cube = magiccube.Cube(3)
    for move in cfop.expand_moves(scramble) + list(solution):
        cube.rotate(move)
    return get_cube_state_str(cube) == SOLVED_STATE


def load_scrambles(path: str) -> List[str]:
    scramble_path = Path(path)
    if not scramble_path.exists():
        raise FileNotFoundError(f"Scramble file not found: {path}")

    scrambles = []
    with open(scramble_path, "r") as f:
        for line in f:
            line = line.split("#", 1)[0].strip()
            if line:
                scrambles.append(line)
    return scrambles


def solve_scramble(scramble: str, solver_config: cfop.SolverConfig, verify: bool = True) -> Dict:
    """Solve one scramble and collect the numbers reported in the summary."""
    result = {
        "scramble": scramble,
        "steps": [],
        "description": "",
        "solution": None,
        "solution_length": None,
        "failed_steps": 0,
        "verified": None,
        "error": None,
        "time_seconds": 0,
    }

    try:
        state = cfop.apply_moves(cfop.SOLVED, scramble)
    except cfop.MoveParseError as e:
        result["error"] = str(e)
        return result

    start_time = time.time()
    steps = cfop.solve_cfop(state, solver_config)
    result["time_seconds"] = time.time() - start_time

    solution = cfop.flatten_moves(steps)
    result["steps"] = [step.model_dump() for step in steps]
    result["description"] = cfop.describe_steps(steps)
    result["solution"] = solution
    result["solution_length"] = len(solution)
    result["failed_steps"] = sum(step.failed for step in steps)
    if verify:
        result["verified"] = verify_solution(scramble, solution)
    return result


# ============================================================================
# Parallel Processing Workers (module-level for pickling)
# ============================================================================

def _solve_worker(index: int, scramble: str, solver_config: Dict, verify: bool):
    return index, solve_scramble(scramble, cfop.SolverConfig(**solver_config), verify)


def _is_solved(result: Dict) -> bool:
    if result["error"] is not None:
        return False
    if result["verified"] is not None:
        return result["verified"]
    return result["failed_steps"] == 0


def run_evaluation(
    scrambles: List[str],
    solver_config: cfop.SolverConfig,
    num_workers: int = 1,
    verify: bool = True,
) -> List[Dict]:
    print(f"\n{'='*60}")
    print(f"Solving {len(scrambles)} scramble(s) with {num_workers} worker(s)")
    print(f"{'='*60}\n")

    results: List[Optional[Dict]] = [None] * len(scrambles)

    if num_workers <= 1:
        for i, scramble in enumerate(tqdm(scrambles, desc="Solving", disable=len(scrambles) < 2)):
            results[i] = solve_scramble(scramble, solver_config, verify)
    else:
        config_dict = solver_config.model_dump()
        with ProcessPoolExecutor(max_workers=num_workers) as executor:
            futures = [
                executor.submit(_solve_worker, i, scramble, config_dict, verify)
                for i, scramble in enumerate(scrambles)
            ]
            for future in tqdm(as_completed(futures), total=len(futures), desc="Solving"):
                index, result = future.result()
                results[index] = result

    for i, result in enumerate(results):
        print(f"Cube {i+1}/{len(results)}: scramble = {result['scramble']}")
        if result["error"] is not None:
            print(f"  ✗ Invalid scramble: {result['error']}")
            continue
        for line in result["description"].splitlines():
            print(f"    {line}")
        status = "✓" if result["failed_steps"] == 0 else "✗"
        print(f"  {status} {result['solution_length']} moves, {result['failed_steps']} failed step(s), "
              f"{result['time_seconds']:.3f}s")
        if result["verified"] is not None:
            print(f"    Validation: {'SOLUTION IS VALID' if result['verified'] else 'SOLUTION IS INVALID'}")

    # Summary statistics
    solved = [r for r in results if _is_solved(r)]

    print(f"\n{'='*60}")
    print("Summary")
    print(f"{'='*60}")
    print(f"Solved: {len(solved)}/{len(results)} ({100*len(solved)/max(1, len(results)):.1f}%)")

    if solved:
        avg_length = sum(r["solution_length"] for r in solved) / len(solved)
        avg_time = sum(r["time_seconds"] for r in solved) / len(solved)
        print(f"Avg solution length: {avg_length:.2f}")
        print(f"Avg time: {avg_time:.3f}s")

    return results


def report_broken_algorithms(solver_config: cfop.SolverConfig) -> List[str]:
    """Warn about library entries the matcher will skip."""
    broken = []
    for label, library in (("OLL", solver_config.oll_library), ("PLL", solver_config.pll_library)):
        for name in cfop.parse_library(library):
            print(f"Warning: {label} algorithm '{name}' does not parse and will be skipped")
            broken.append(name)
    return broken


def collect_scrambles(config: SolveConfig) -> List[str]:
    scrambles = []
    if config.scramble.strip():
        scrambles.append(config.scramble.strip())
    if config.scramble_file:
        scrambles.extend(load_scrambles(config.scramble_file))
    if not scrambles:
        raise ValueError("Nothing to solve: pass --scramble or --scramble_file")
    return scrambles


@cli.command(singleton=True)
def solve(config: SolveConfig):
    """Solve one scramble, or every scramble in a file."""
    solver_config = (
        cfop.SolverConfig.from_yaml(config.solver_config)
        if config.solver_config else cfop.SolverConfig()
    )
    if config.verbose:
        solver_config.verbose = True
    report_broken_algorithms(solver_config)

    scrambles = collect_scrambles(config)
    return run_evaluation(scrambles, solver_config, config.num_workers, config.verify)


if __name__ == "__main__":
    cli()
