import logging
from pathlib import Path

from rich.logging import RichHandler

from priority_scheduler import cli
from priority_scheduler.errors import InternalInvariantError


def test_demo_prints_schedule(capsys):
    assert cli.main(["demo", "--plain"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "0  1  8 12 16" in out
    assert "Per-process metrics" in out
    assert "11.00" in out


def test_run_workload(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,2,1\nB,0,1,0\n")
    assert cli.main(["run", "--workload", str(p)]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "0  1  3" in out


def test_zero_burst_is_rejected(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,0,1\n")
    assert cli.main(["run", "-w", str(p)]) == cli.EXIT_INVALID_INPUT
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "Gantt" not in out


def test_missing_workload_file(tmp_path: Path, capsys):
    assert cli.main(["run", "-w", str(tmp_path / "missing.json")]) == cli.EXIT_INVALID_INPUT
    assert "Cannot read workload" in capsys.readouterr().out


def test_demo_step_animation(capsys):
    assert cli.main(["demo", "--step", "--step-delay", "0", "--plain"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "duration 16 time units" in out
    assert "t= 0: P1" in out
    assert "t= 1: P2" in out
    assert "t=15: P1" in out


def test_step_animation_shows_idle_ticks(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,2,1,1\n")
    assert cli.main(["run", "-w", str(p), "--step", "--step-delay", "0", "--plain"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "t= 0: idle" in out
    assert "t= 2: A" in out


def test_internal_error_exit_code(monkeypatch, capsys):
    def broken_run(processes):
        raise InternalInvariantError("time bound exceeded", state={"completed": 0})

    monkeypatch.setattr(cli, "run_schedule", broken_run)
    assert cli.main(["demo", "--plain"]) == cli.EXIT_INTERNAL_ERROR
    out = capsys.readouterr().out
    assert "Internal error" in out
    assert "Gantt" not in out


def test_verbose_enables_debug_logging():
    try:
        assert cli.main(["--verbose", "demo", "--plain"]) == cli.EXIT_OK
        assert logging.getLogger().level == logging.DEBUG
        assert isinstance(logging.getLogger().handlers[0], RichHandler)
    finally:
        cli.configure_logging(False)


def test_default_logging_level_is_warning():
    cli.main(["demo", "--plain"])
    assert logging.getLogger().level == logging.WARNING
