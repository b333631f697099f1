"""Shared fixtures and utilities for Tally tests."""

from typing import Dict

import pytest

from tally import (
    TallyExprNode, TallyFloat, TallyFunctionName, TallyFunctionNode, TallyInteger, TallyLexer,
    TallyLiteral, TallyLiteralNode, TallySheet, TallyVariableRefNode, evaluate, parse
)


@pytest.fixture
def sheet():
    """Create a fresh sheet for each test."""
    return TallySheet()


@pytest.fixture
def lexer():
    """Create a lexer with the default depth limit."""
    return TallyLexer()


@pytest.fixture
def env() -> Dict[str, TallyLiteral]:
    """An empty variable environment."""
    return {}


class TallyTestHelpers:
    """Helper utilities for Tally testing."""

    @staticmethod
    def run(text: str, env: Dict[str, TallyLiteral] | None = None) -> TallyLiteral:
        """Parse and evaluate a single line."""
        return evaluate(parse(text), env if env is not None else {})

    @staticmethod
    def lit(value: int | float) -> TallyLiteralNode:
        """Build a literal node from a Python number."""
        if isinstance(value, int):
            return TallyLiteralNode(TallyInteger(value))

        return TallyLiteralNode(TallyFloat(value))

    @staticmethod
    def ref(name: str) -> TallyVariableRefNode:
        """Build a variable reference node."""
        return TallyVariableRefNode(name)

    @staticmethod
    def call(function: TallyFunctionName, *args: TallyExprNode | int | float) -> TallyFunctionNode:
        """Build a function node, wrapping bare numbers as literals."""
        nodes = tuple(
            arg if isinstance(arg, TallyExprNode) else TallyTestHelpers.lit(arg) for arg in args
        )
        return TallyFunctionNode(function, nodes)


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return TallyTestHelpers
