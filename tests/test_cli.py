from __future__ import annotations

from pathlib import Path

import pytest

from prngcheck.__main__ import (
    EXIT_INVALID_CONFIG,
    EXIT_INVALID_INPUT,
    EXIT_MISSING_FILE,
    EXIT_SUCCESS,
    main,
)


def test_main_runs_with_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[sequence]\ncount = 300\n", encoding="utf-8")
    report_path = tmp_path / "report.md"

    exit_code = main(["--config", str(config_path), "--report", str(report_path), "-v"])

    assert exit_code == EXIT_SUCCESS
    captured = capsys.readouterr()
    assert "Multiplicative" in captured.out
    assert "MacLaren-Marsaglia" in captured.out
    assert "Result:" in captured.out
    assert report_path.exists()


def test_main_writes_sequence_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[sequence]\ncount = 10\n[combiner]\nenabled = false\n", encoding="utf-8")
    output_path = tmp_path / "output.txt"

    exit_code = main(["-c", str(config_path), "-o", str(output_path)])

    assert exit_code == EXIT_SUCCESS
    assert len(output_path.read_text(encoding="utf-8").splitlines()) == 1 + 10 + 4


def test_main_reports_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--config", str(tmp_path / "absent.ini")])

    assert exit_code == EXIT_MISSING_FILE
    assert "Error:" in capsys.readouterr().err


def test_main_reports_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[combiner]\noffset = 0\n", encoding="utf-8")

    exit_code = main(["--config", str(config_path)])

    assert exit_code == EXIT_INVALID_CONFIG
    assert "Configuration error:" in capsys.readouterr().err


def test_main_reports_invalid_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = tmp_path / "values.txt"
    input_path.write_text("0.5\n2.0\n", encoding="utf-8")

    exit_code = main(["--input", str(input_path)])

    assert exit_code == EXIT_INVALID_INPUT
    assert "Input error:" in capsys.readouterr().err


def test_main_reports_unusable_significance(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[kolmogorov]\nsignificance = 0.9\n", encoding="utf-8")

    exit_code = main(["--config", str(config_path)])

    assert exit_code == EXIT_INVALID_CONFIG
    assert "significance" in capsys.readouterr().err.lower()
