"""
Tests for the Interpreter and the read loop.
"""

import io

import pytest

from backend.splitcalc.config import InterpreterConfig
from backend.splitcalc.errors import EvalError, LexError, ParseError
from backend.splitcalc.repl import Interpreter, repl


class InterruptingInput:
    """Input stream that yields some lines, then raises KeyboardInterrupt."""

    def __init__(self, lines):
        self.lines = list(lines)

    def readline(self):
        if self.lines:
            return self.lines.pop(0)
        raise KeyboardInterrupt


class TestInterpreter:
    """Tests for Interpreter."""

    def test_evaluate_line(self):
        """Test the full pipeline."""
        assert Interpreter().evaluate_line("(1+2)*3") == 9

    def test_evaluate_line_raises(self):
        """Test errors propagate from evaluate_line."""
        interpreter = Interpreter()
        with pytest.raises(LexError):
            interpreter.evaluate_line("1@2")
        with pytest.raises(ParseError):
            interpreter.evaluate_line("(1+2")
        with pytest.raises(EvalError):
            interpreter.evaluate_line("1<-2")

    def test_run_line_success(self):
        """Test a report for a good line."""
        report = Interpreter().run_line("2^3^2")
        assert report.success is True
        assert report.value == 64
        assert len(report.tokens) == 5
        assert report.tree is not None
        assert report.error is None

    def test_run_line_keeps_partial_results(self):
        """Test tokens and tree are kept when evaluation fails."""
        report = Interpreter().run_line("1/0")
        assert report.success is False
        assert isinstance(report.error, EvalError)
        assert len(report.tokens) == 3
        assert report.tree is not None

    def test_run_line_lex_failure(self):
        """Test a lexing failure leaves no tokens."""
        report = Interpreter().run_line("1@2")
        assert report.success is False
        assert isinstance(report.error, LexError)
        assert report.tokens == []
        assert report.tree is None

    def test_lines_are_independent(self):
        """Test assignments do not carry over to the next line."""
        interpreter = Interpreter()
        assert interpreter.evaluate_line("a<-5") == 5
        assert interpreter.evaluate_line("a") == 0

    def test_run_line_deep_chain(self):
        """Test a very long operator chain is reported, not raised."""
        report = Interpreter().run_line("+".join(["1"] * 1500))
        assert report.success is False
        assert isinstance(report.error, ParseError)
        assert "too deeply nested" in report.error.message

    def test_describe_respects_config(self):
        """Test dumps are only produced when enabled."""
        report = Interpreter().run_line("1+2")
        assert Interpreter().describe(report) == ""

        verbose = Interpreter(InterpreterConfig(show_tokens=True, show_tree=True))
        text = verbose.describe(verbose.run_line("1+2"))
        assert '"+"\t=> operator\t(priority: 1)' in text
        assert "BinaryOp(+)" in text


class TestRepl:
    """Tests for the read loop."""

    def test_session(self):
        """Test results, errors and blank lines in one session."""
        stdin = io.StringIO("1+2\n\n1@2\n(1+2)*3\n")
        stdout = io.StringIO()

        failures = repl(Interpreter(), stdin, stdout)

        output = stdout.getvalue()
        assert failures == 1
        assert "=> 3\n" in output
        assert "LexError:" in output
        assert "=> 9\n" in output
        assert output.count(">>> ") == 5
        assert output.endswith("\nbye\n")

    def test_error_does_not_stop_loop(self):
        """Test lines after a failure are still evaluated."""
        stdin = io.StringIO("1/0\n2*2\n")
        stdout = io.StringIO()
        repl(Interpreter(), stdin, stdout)
        output = stdout.getvalue()
        assert output.index("EvalError: divided by 0") < output.index("=> 4")

    def test_deep_chain_does_not_stop_loop(self):
        """Test the loop keeps reading after a line nests too deeply."""
        chain = "+".join(["1"] * 1500)
        stdin = io.StringIO(chain + "\n2*2\n")
        stdout = io.StringIO()

        failures = repl(Interpreter(), stdin, stdout)

        output = stdout.getvalue()
        assert failures == 1
        assert "ParseError: expression too deeply nested" in output
        assert "=> 4\n" in output
        assert output.endswith("\nbye\n")

    def test_keyboard_interrupt(self):
        """Test Ctrl-C ends the loop with the farewell."""
        stdout = io.StringIO()
        repl(Interpreter(), InterruptingInput(["1+1\n"]), stdout)
        output = stdout.getvalue()
        assert "=> 2" in output
        assert output.endswith("\nbye\n")

    def test_custom_config(self):
        """Test prompt, prefix and farewell come from the config."""
        config = InterpreterConfig(prompt="? ", result_prefix="= ", farewell="ciao")
        stdout = io.StringIO()
        repl(Interpreter(config), io.StringIO("2^10\n"), stdout)
        assert stdout.getvalue() == "? = 1024\n? \nciao\n"

    def test_show_tokens(self):
        """Test token dumps are printed before the result."""
        config = InterpreterConfig(show_tokens=True)
        stdout = io.StringIO()
        repl(Interpreter(config), io.StringIO("7\n"), stdout)
        output = stdout.getvalue()
        assert output.index('"7"\t=> literal') < output.index("=> 7\n")
