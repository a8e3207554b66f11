import io

import pytest

import calc
from calc_errors import CalcSyntaxError, DivisionByZero, TrailingContent


def run(source, **kwargs):
    stdout, stderr = io.StringIO(), io.StringIO()
    calc.repl(io.StringIO(source), stdout, stderr, **kwargs)
    return stdout.getvalue(), stderr.getvalue()


def test_calculate():
    assert calc.calculate("(+ 1 (* 2 3))\n") == 7
    assert calc.calculate("(- 5)\n") == 5
    assert calc.calculate("42") == 42
    assert calc.calculate("(+ 1 2)\r\n") == 3


def test_calculate_trailing_content():
    with pytest.raises(TrailingContent) as info:
        calc.calculate("(+ 1 2) extra\n")
    assert info.value.remainder == " extra\n"


def test_calculate_trailing_space():
    with pytest.raises(TrailingContent):
        calc.calculate("7 \n")


def test_calculate_propagates_core_errors():
    with pytest.raises(CalcSyntaxError):
        calc.calculate("(+ 1 2\n")
    with pytest.raises(DivisionByZero):
        calc.calculate("(/ 1 0)\n")


def test_repl_prints_results():
    out, err = run("(+ 1 (* 2 3))\n(- 10 3 2)\n", prompt="")
    assert out == "=> 7\n=> 5\n"
    assert err == ""


def test_repl_writes_prompt_for_every_read():
    out, _ = run("1\n")
    assert out == ">>> => 1\n>>> "


def test_repl_skips_blank_lines():
    out, err = run("\n\n3\n", prompt="")
    assert out == "=> 3\n"
    assert err == ""


def test_repl_reports_errors_and_continues():
    source = "(/ 10 0)\n(% 1 2)\n(+ 1 2) extra\n(+)\n(+ 1 2\n(* 2 21)\n"
    out, err = run(source, prompt="")
    assert out == "=> 42\n"
    lines = err.splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("error: division by zero")
    assert lines[1] == "error: unknown operator '%'"
    assert lines[2] == "invalid expr: (+ 1 2) extra"
    assert lines[3].startswith("error: '+' needs at least one operand")
    assert lines[4].startswith("error: expected")


def test_repl_last_line_without_terminator():
    out, _ = run("(* 6 7)", prompt="")
    assert out == "=> 42\n"


def test_repl_debug_echoes_tree():
    out, err = run("(+  5 6)\n", prompt="", debug=True)
    assert out == "=> 11\n"
    assert err == "parsed: (+ 5 6)\n"


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("(* 3 4)\n"))
    assert calc.main(["--prompt", ""]) == 0
    assert capsys.readouterr().out == "=> 12\n"


def test_main_interrupted(monkeypatch, capsys):
    def interrupt(**kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(calc, "repl", interrupt)
    assert calc.main([]) == 130
    assert "interrupted" in capsys.readouterr().err


def test_repl_survives_very_long_literal():
    out, err = run("9" * 5000 + "\n(+ 1 2)\n", prompt="")
    assert out == "=> 3\n"
    assert err.startswith("error: constant 999")


def test_repl_survives_deep_nesting():
    depth = 2000
    out, err = run("(+ " * depth + "1" + ")" * depth + "\n(+ 1 2)\n", prompt="")
    assert out == "=> 1\n=> 3\n"
    assert err == ""


def test_repl_debug_prints_deep_tree():
    depth = 2000
    line = "(* " * depth + "2" + ")" * depth
    out, err = run(line + "\n", prompt="", debug=True)
    assert out == "=> 2\n"
    assert err == f"parsed: {line}\n"
