"""
Interpreter front end and read loop.

The Interpreter runs one line through lex, build and evaluate. The read
loop feeds it lines from a stream until end of input or an interrupt.
Each line gets its own tree, so no variable survives to the next line.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import InterpreterConfig
from .errors import CalcError
from .logic.evaluator import ExpressionEvaluator
from .logic.lexer import Lexer
from .logic.nodes import Value
from .logic.parser import TreeBuilder
from .report import LineReport, format_tokens, format_tree

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Runs single lines through the expression pipeline.

    Provides:
    - evaluate_line: value or raised CalcError
    - run_line: LineReport with the error captured
    """

    def __init__(self, config: Optional[InterpreterConfig] = None):
        self.config = config or InterpreterConfig()
        self.lexer = Lexer()
        self.evaluator = ExpressionEvaluator()

    def evaluate_line(self, line: str) -> Value:
        """Evaluate one line, raising on failure."""
        tokens = self.lexer.tokenize(line)
        tree = TreeBuilder(tokens).build()
        return self.evaluator.evaluate(tree)

    def run_line(self, line: str) -> LineReport:
        """
        Evaluate one line and report the outcome.

        Args:
            line: The input line.

        Returns:
            LineReport holding the value or the error, plus the tokens
            and tree that were produced before any failure.
        """
        report = LineReport(line=line, success=False)

        try:
            report.tokens = self.lexer.tokenize(line)
            report.tree = TreeBuilder(report.tokens).build()
            report.value = self.evaluator.evaluate(report.tree)
            report.success = True
        except CalcError as e:
            logger.info("failed to evaluate %r: %s", line, e)
            report.error = e

        return report

    def describe(self, report: LineReport) -> str:
        """Debug dumps enabled by the configuration."""
        sections = []
        if self.config.show_tokens and report.tokens:
            sections.append(format_tokens(report.tokens))
        if self.config.show_tree and report.tree is not None:
            sections.append(format_tree(report.tree))
        return "\n".join(sections)


def repl(
    interpreter: Optional[Interpreter] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Read lines until end of input and print each result.

    Blank lines only reprint the prompt. Errors are printed and the loop
    continues. End of input or Ctrl-C prints the farewell.

    Returns:
        Number of lines that failed.
    """
    interpreter = interpreter or Interpreter()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    config = interpreter.config
    failures = 0

    try:
        while True:
            stdout.write(config.prompt)
            stdout.flush()

            line = stdin.readline()
            if not line:
                break

            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            report = interpreter.run_line(line)
            if not report.success:
                failures += 1

            dump = interpreter.describe(report)
            if dump:
                stdout.write(dump + "\n")
            stdout.write(report.render(config.result_prefix) + "\n")
    except KeyboardInterrupt:
        pass

    stdout.write(f"\n{config.farewell}\n")
    return failures
