"""Tests for the cloudvm command line."""

import json

import pytest

from cloudvm.cli import main

CONSTANT = "push 5\npush 3\nadd\nret\n"

# z where x >= 15 and y >= 10, else 0
SLAB = "\n".join([
    "push x", "push -15", "add", "jmpos 2", "push 0", "ret",
    "push y", "push -10", "add", "jmpos 2", "push 0", "ret",
    "push z", "ret",
]) + "\n"


@pytest.fixture
def write_program(tmp_path):
    def _write(text, name="prog.txt"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return _write


class TestRun:

    def test_prints_two_lines(self, write_program, capsys):
        assert main(["run", write_program(CONSTANT)]) == 0
        out = capsys.readouterr().out
        assert out == "Calibration number: 216000\nClouds: 1\n"

    def test_slab_program(self, write_program, capsys):
        assert main(["run", write_program(SLAB)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["Calibration number: 130500", "Clouds: 1"]

    def test_bare_invocation_uses_default_listing(self, tmp_path, monkeypatch, capsys):
        (tmp_path / "input_program.txt").write_text("push 0\nret\n")
        monkeypatch.chdir(tmp_path)
        assert main([]) == 0
        assert capsys.readouterr().out == "Calibration number: 0\nClouds: 0\n"

    def test_config_file(self, write_program, tmp_path, capsys):
        program = write_program(CONSTANT)
        log_file = tmp_path / "run.log"
        config = tmp_path / "run.json"
        config.write_text(json.dumps({
            "program_path": program,
            "log_level": "INFO",
            "log_file": str(log_file),
        }))
        assert main(["run", "--config", str(config)]) == 0
        captured = capsys.readouterr()
        assert captured.out == "Calibration number: 216000\nClouds: 1\n"
        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        evaluated = [r for r in records if r["message"] == "Grid evaluated"]
        assert evaluated[0]["calibration_number"] == 216000
        assert evaluated[0]["active_cells"] == 27000

    def test_stdout_clean_at_info_level(self, write_program, capsys):
        assert main(["run", write_program(CONSTANT), "--log-level", "info"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "Calibration number: 216000\nClouds: 1\n"
        assert "Clouds counted" in captured.err

    def test_decode_error_exits_nonzero(self, write_program, capsys):
        assert main(["run", write_program("push 1\nmultiply\nret\n")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error:" in captured.err
        assert ":2: Unrecognised instruction: multiply" in captured.err

    def test_runtime_fault_exits_nonzero(self, write_program, capsys):
        assert main(["run", write_program("add\nret\n")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Stack underflow" in captured.err

    def test_missing_program(self, tmp_path, capsys):
        assert main(["run", str(tmp_path / "missing.txt")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        config = tmp_path / "run.json"
        config.write_text('{"bogus": 1}')
        assert main(["run", "--config", str(config)]) == 1
        assert "Unknown config keys: bogus" in capsys.readouterr().err

    def test_internal_value_error_not_masked(self, write_program, monkeypatch):
        def broken(program, trace=False):
            raise ValueError("active grid has wrong shape")

        monkeypatch.setattr("cloudvm.cli.evaluate_grid", broken)
        with pytest.raises(ValueError, match="wrong shape"):
            main(["run", write_program(CONSTANT)])


class TestDisasmAndEval:

    def test_disasm(self, write_program, capsys):
        assert main(["disasm", write_program("push X\njmpos -1\nret\n")]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["   0: push x", "   1: jmpos -1", "   2: ret"]

    def test_disasm_rejects_bad_listing(self, write_program, capsys):
        assert main(["disasm", write_program("push w\n")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_eval_single_point(self, write_program, capsys):
        assert main(["eval", write_program(SLAB), "20", "15", "7"]) == 0
        assert capsys.readouterr().out == "7\n"
        assert main(["eval", write_program(SLAB), "3", "15", "7"]) == 0
        assert capsys.readouterr().out == "0\n"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "cloudvm" in capsys.readouterr().out
