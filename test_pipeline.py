"""
End-to-end tests for the CFOP stage pipeline.
"""

import pytest

from cfop import SOLVED, SolverConfig, SolveStep, apply_moves, describe_steps, flatten_moves, invert_moves, is_solved, solve_cfop
from cfop.pipeline import ALREADY_SOLVED, CROSS_FAILED, NOT_SOLVED, SEARCH_FAILED

SUNE = "R U R' U R U2 R'"
T_PERM = "R U R' U' R' F R2 U' R' U' R U R' F'"
H_PERM = "M2 U M2 U2 M2 U M2"

STAGE_NAMES = ["Cross", "F2L 1 (FR)", "F2L 2 (FL)", "F2L 3 (BL)", "F2L 4 (BR)"]


def solve(scramble, **overrides):
    state = apply_moves(SOLVED, scramble)
    steps = solve_cfop(state, SolverConfig(**overrides))
    return state, steps


def test_solved_cube():
    _, steps = solve("")
    assert [step.name for step in steps] == STAGE_NAMES
    assert all(step.moves == ALREADY_SOLVED for step in steps)
    assert not any(step.failed for step in steps)
    assert flatten_moves(steps) == []


def test_default_config_is_used():
    steps = solve_cfop(SOLVED)
    assert len(steps) == 5


def test_two_move_cross():
    state, steps = solve("F R")
    assert steps[0].name == "Cross"
    assert steps[0].moves == "R' F'"
    assert [step.name for step in steps] == STAGE_NAMES
    assert all(step.moves == ALREADY_SOLVED for step in steps[1:])
    assert is_solved(apply_moves(state, flatten_moves(steps)))


def test_sune_case_uses_library():
    state, steps = solve(invert_moves(SUNE))
    assert len(steps) == 6
    oll = steps[5]
    assert oll.name == "OLL (Sune)"
    assert oll.algorithm == "Sune"
    assert oll.moves == SUNE
    assert not any(step.name.endswith("(Search)") for step in steps)
    assert is_solved(apply_moves(state, flatten_moves(steps)))


def test_t_perm_case():
    state, steps = solve(invert_moves(T_PERM))
    assert steps[-1].name == "PLL (T-Perm)"
    assert steps[-1].moves == T_PERM
    assert is_solved(apply_moves(state, flatten_moves(steps)))


def test_h_perm_case_with_slice_moves():
    state, steps = solve(invert_moves(H_PERM))
    assert steps[-1].name == "PLL (H-Perm)"
    assert steps[-1].moves == H_PERM
    assert is_solved(apply_moves(state, flatten_moves(steps)))


def test_top_layer_adjustment():
    state, steps = solve("U")
    assert len(steps) == 6
    assert steps[-1] == SolveStep(name="AUF", moves="U'")
    assert is_solved(apply_moves(state, flatten_moves(steps)))


def test_oll_edge_search_failure_falls_through_to_library():
    # the edge search may only pass through F2L-solved states, so two flipped
    # edges cannot be fixed with the small alphabet; the library still can
    state, steps = solve(invert_moves("F R U R' U' F'"))
    assert [step.name for step in steps[5:]] == ["OLL (Cross)", "OLL (T-OLL)"]
    assert steps[5].failed
    assert steps[6].moves == "F R U R' U' F'"
    assert is_solved(apply_moves(state, flatten_moves(steps)))


def test_cross_failure_stops_pipeline():
    _, steps = solve("F R", cross_depth=0)
    assert steps == [SolveStep(name="Error", moves=CROSS_FAILED, failed=True)]
    assert flatten_moves(steps) == []


def test_f2l_failure_is_not_fatal():
    _, steps = solve("R U R'", f2l_depth=0)
    assert steps[0].moves == ALREADY_SOLVED
    assert steps[1].name == "F2L 1 (FR)"
    assert steps[1].failed
    assert steps[1].moves == SEARCH_FAILED
    assert [step.moves for step in steps[2:5]] == [ALREADY_SOLVED] * 3
    assert len(steps) > 5
    assert steps[-1] == SolveStep(name="AUF", moves=NOT_SOLVED, failed=True)


def test_f2l_goal_is_the_pair_alone():
    # only intermediate states have to keep the cross, the final move may break it
    _, steps = solve("R U R'")
    assert steps[1].name == "F2L 1 (FR)"
    assert not steps[1].failed
    assert steps[1].moves == "U' R'"


def test_oll_library_miss_falls_back_to_search():
    state, steps = solve(invert_moves(SUNE), oll_library=[], pll_library=[])
    assert [step.name for step in steps[5:]] == ["OLL (Search)", "PLL (Search)", "AUF"]
    oll, pll, auf = steps[5:]
    assert oll.failed and oll.moves == SEARCH_FAILED and oll.algorithm is None
    assert pll.failed and pll.moves == SEARCH_FAILED
    assert auf == SolveStep(name="AUF", moves=NOT_SOLVED, failed=True)
    # nothing was applied, so the later stages saw the original state
    assert flatten_moves(steps) == []
    assert apply_moves(state, flatten_moves(steps)) == state


def test_pll_library_miss_falls_back_to_search():
    state, steps = solve(invert_moves(T_PERM), pll_library=[])
    assert [step.name for step in steps[5:]] == ["PLL (Search)", "AUF"]
    assert steps[5].failed
    assert steps[5].moves == SEARCH_FAILED
    assert steps[6] == SolveStep(name="AUF", moves=NOT_SOLVED, failed=True)
    assert flatten_moves(steps) == []


def test_input_state_is_not_modified():
    state = apply_moves(SOLVED, "F R U")
    before = state.fingerprint()
    solve_cfop(state)
    assert state.fingerprint() == before


def test_verbose_prints_steps(capsys):
    solve("U", verbose=True)
    out = capsys.readouterr().out
    assert "  Cross: Already Solved" in out
    assert "  AUF: U'" in out


def test_quiet_by_default(capsys):
    solve("U")
    assert capsys.readouterr().out == ""


def test_flatten_moves_expands_each_step():
    steps = [
        SolveStep(name="Cross", moves="R' F'"),
        SolveStep(name="F2L 1 (FR)", moves=ALREADY_SOLVED),
        SolveStep(name="OLL (Search)", moves=SEARCH_FAILED, failed=True),
        SolveStep(name="PLL (Aa-Perm)", moves="x R' U R' D2 R U' R' D2 R2", algorithm="Aa-Perm"),
        SolveStep(name="AUF", moves="U"),
    ]
    assert flatten_moves(steps) == [
        "R'", "F'",
        "R'", "F", "R'", "B2", "R", "F'", "R'", "B2", "R2",
        "U",
    ]
    assert [step.playable for step in steps] == [True, False, False, True, True]


def test_describe_steps():
    steps = [SolveStep(name="Cross", moves="R' F'"), SolveStep(name="AUF", moves="U")]
    assert describe_steps(steps) == "Cross: R' F'\nAUF: U"


def test_config_from_yaml(tmp_path):
    path = tmp_path / "solver.yaml"
    path.write_text(
        "cross_depth: 4\n"
        "oll_library:\n"
        "  - [Sune, \"R U R' U R U2 R'\"]\n"
    )
    config = SolverConfig.from_yaml(str(path))
    assert config.cross_depth == 4
    assert config.oll_library == [("Sune", SUNE)]
    assert config.f2l_depth == 8
    assert len(config.pll_library) == 10


def test_config_from_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SolverConfig.from_yaml(str(path)) == SolverConfig()


def test_config_from_missing_yaml(tmp_path):
    with pytest.raises(FileNotFoundError):
        SolverConfig.from_yaml(str(tmp_path / "missing.yaml"))
