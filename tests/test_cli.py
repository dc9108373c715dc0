import json
import logging
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from letter import letter_cli

FAKE_SOURCE = "let x = 5;"


def test_run_letter_string_input_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    output = letter_cli.run_letter(source=FAKE_SOURCE, is_string=True)
    out = capsys.readouterr().out.strip()
    assert out == output
    data = json.loads(out)
    assert data["type"] == "Program"
    assert data["body"][0]["type"] == "VariableStatement"
    assert data["body"][0]["declarations"][0]["init"] == {"type": "NumericLiteral", "value": 5}


def test_run_letter_file_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    file_path = tmp_path / "input.letter"
    file_path.write_text('"hello"; 42;', encoding="utf-8")
    letter_cli.run_letter(source=str(file_path))
    data = json.loads(capsys.readouterr().out)
    assert [s["expression"]["value"] for s in data["body"]] == ["hello", 42]


def test_run_letter_rejects_other_extensions() -> None:
    with pytest.raises(ValueError, match="Only .letter files are supported."):
        letter_cli.run_letter(source="input.js")


def test_run_letter_source_format(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="let  x=(1+2)*3 ;", is_string=True, fmt="source")
    assert capsys.readouterr().out.strip() == "let x = (1 + 2) * 3;"


def test_run_letter_indent(capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source="1;", is_string=True, indent=4)
    assert '\n    "type": "Program"' in capsys.readouterr().out


def test_run_letter_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    output_path = tmp_path / "out.json"
    letter_cli.run_letter(source=FAKE_SOURCE, is_string=True, out=str(output_path))
    assert capsys.readouterr().out == ""
    assert json.loads(output_path.read_text(encoding="utf-8"))["type"] == "Program"


def test_run_letter_propagates_syntax_error() -> None:
    with pytest.raises(SyntaxError, match='expected ";"'):
        letter_cli.run_letter(source="x", is_string=True)


def test_render_unknown_format() -> None:
    ast = letter_cli.Parser().parse("1;")
    with pytest.raises(ValueError, match="Unknown output format"):
        letter_cli.render(ast, fmt="yaml")


def test_main_entry(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(sys, "argv", ["letter", "-s", FAKE_SOURCE, "-f", "source"])
    monkeypatch.setattr(letter_cli, "run_letter", lambda **kwargs: calls.append(kwargs))
    letter_cli.main()
    assert calls == [
        {"source": FAKE_SOURCE, "is_string": True, "fmt": "source", "out": None, "indent": 2}
    ]


def test_main_prints_parse_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "-s", "1 = 2;"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "error: Invalid left-hand side in assignment expression" in err


def test_main_prints_lex_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "-s", "x = #;"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    assert 'Unexpected token: "#" at offset 4' in capsys.readouterr().err


def test_main_reports_unsupported_extension(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "nope.txt"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    assert "error: Only .letter files are supported." in capsys.readouterr().err


def test_main_reports_missing_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "nope.letter"
    monkeypatch.setattr(sys, "argv", ["letter", str(missing)])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "nope.letter" in err


def test_main_invalid_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["letter", "-f", "xml", "-s", "1;"])
    with pytest.raises(SystemExit) as e:
        letter_cli.main()
    assert e.value.code == 2


def test_main_no_args_launches_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    called: list[bool] = []
    monkeypatch.setattr(sys, "argv", ["letter"])
    monkeypatch.setattr("letter.letter_repl.start_repl", lambda: called.append(True))
    letter_cli.main()
    assert called == [True]


def test_main_repl_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    called: list[dict[str, Any]] = []
    monkeypatch.setattr(sys, "argv", ["letter", "--repl", "--verbose", "-f", "source"])
    monkeypatch.setattr(
        "letter.letter_repl.start_repl", lambda **kwargs: called.append(kwargs)
    )
    letter_cli.main()
    assert called == [{"fmt": "source", "verbose": True}]


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}
    monkeypatch.setenv("LETTER_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    letter_cli.configure_logging(None)
    assert seen["level"] == logging.DEBUG


def test_configure_logging_flag_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}
    monkeypatch.setenv("LETTER_LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    letter_cli.configure_logging("ERROR")
    assert seen["level"] == logging.ERROR


def test_configure_logging_unknown_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}
    monkeypatch.delenv("LETTER_LOG_LEVEL", raising=False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    letter_cli.configure_logging("loud")
    assert seen["level"] == logging.WARNING


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(n=st.integers(min_value=0, max_value=10**9))  # type: ignore[misc]
def test_run_letter_numbers(n: int, capsys: pytest.CaptureFixture[str]) -> None:
    letter_cli.run_letter(source=f"{n};", is_string=True)
    data = json.loads(capsys.readouterr().out)
    assert data["body"][0]["expression"] == {"type": "NumericLiteral", "value": n}
