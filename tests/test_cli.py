import logging
import random

from cornerkube import Slot


def make_cli(cli_module, seed=42):
    return cli_module.cornerkube_cli(rng=random.Random(seed))


def test_new_then_correct_answer(cli_module, capsys):
    cli = make_cli(cli_module)
    cli.onecmd("new")
    assert "Follow" in capsys.readouterr().out

    solution = cli.puzzle.solution
    cli.onecmd(f"answer {solution.slot.label} {solution.twist}")
    assert "Correct! (1/1)" in capsys.readouterr().out
    assert (cli.correct, cli.total) == (1, 1)


def test_wrong_answer_reveals_solution(cli_module, capsys):
    cli = make_cli(cli_module)
    cli.onecmd("new")
    solution = cli.puzzle.solution
    wrong = (solution.twist + 1) % 3
    cli.onecmd(f"answer {int(solution.slot)} {wrong}")
    out = capsys.readouterr().out
    assert f"it was {solution.slot.label}" in out
    assert (cli.correct, cli.total) == (0, 1)


def test_answer_needs_open_puzzle(cli_module, caplog):
    caplog.set_level(logging.WARNING, logger="cornerkube_cli")
    cli = make_cli(cli_module)
    cli.onecmd("answer ULB 0")
    assert "No open puzzle" in caplog.text
    assert cli.total == 0


def test_answer_is_scored_once(cli_module, caplog):
    cli = make_cli(cli_module)
    cli.onecmd("new")
    cli.onecmd("answer ULB 0")
    cli.onecmd("answer ULB 0")
    assert cli.total == 1


def test_bad_answer_is_reported(cli_module, caplog):
    caplog.set_level(logging.ERROR, logger="cornerkube_cli")
    cli = make_cli(cli_module)
    cli.onecmd("new")
    cli.onecmd("answer XYZ 0")
    cli.onecmd("answer ULB")
    assert "Bad answer" in caplog.text
    assert "Usage: answer" in caplog.text
    assert cli.total == 0


def test_track(cli_module, capsys):
    cli = make_cli(cli_module)
    cli.onecmd("track ULB 2 B' U'")
    assert capsys.readouterr().out.strip() == "ULB twist 0"


def test_track_bad_move(cli_module, caplog):
    caplog.set_level(logging.ERROR, logger="cornerkube_cli")
    cli = make_cli(cli_module)
    cli.onecmd("track ULB 0 R Q")
    assert "Cannot track" in caplog.text


def test_apply_and_reset(cli_module, capsys):
    cli = make_cli(cli_module)
    cli.onecmd("apply U")
    assert "U layer" in capsys.readouterr().out
    assert cli.state[0].slot == Slot.URB

    cli.onecmd("apply U X")
    assert cli.state[0].slot == Slot.URB

    cli.onecmd("reset")
    assert cli.state.is_solved()


def test_selftest_command(cli_module, capsys):
    cli = make_cli(cli_module)
    cli.onecmd("selftest")
    assert "All cube move identity tests passed" in capsys.readouterr().out


def test_debug_level(cli_module):
    cli = make_cli(cli_module)
    cli.onecmd("debug_level debug")
    assert logging.getLogger("cornerkube").level == logging.DEBUG
    assert logging.getLogger("cornerkube.puzzle").level == logging.DEBUG
    cli.onecmd("debug_level warning")
    assert logging.getLogger("cornerkube").level == logging.WARNING
    cli_module.set_log_level(logging.NOTSET)


def test_completions(cli_module):
    cli = make_cli(cli_module)
    assert cli.complete_answer("ur", "answer ur", 7, 9) == ["URB", "URF"]
    assert cli.complete_debug_level("w", "debug_level w", 12, 13) == ["warning"]


def test_quit(cli_module, capsys):
    cli = make_cli(cli_module)
    assert cli.onecmd("quit") is True
    assert "Final score: 0/0" in capsys.readouterr().out


def test_answer_rejects_out_of_range_twist(cli_module, caplog):
    caplog.set_level(logging.ERROR, logger="cornerkube_cli")
    cli = make_cli(cli_module)
    cli.onecmd("new")
    cli.onecmd("answer URF 5")
    assert "Bad answer" in caplog.text
    assert cli.total == 0
    assert not cli.answered


def test_track_rejects_out_of_range_twist(cli_module, caplog, capsys):
    caplog.set_level(logging.ERROR, logger="cornerkube_cli")
    cli = make_cli(cli_module)
    cli.onecmd("track ULB 3 R")
    assert "Cannot track" in caplog.text
    assert capsys.readouterr().out == ""
