"""vicissicalc.calc - Formula language and recalculation engine."""

from vicissicalc.calc._engine import CellState, RecalcEngine
from vicissicalc.calc._errors import CalcError, ErrorKind
from vicissicalc.calc._evaluator import BINARY_OPS, Evaluation, evaluate_formula, find_formula
from vicissicalc.calc._lexer import Token, TokenKind, scan, tokenize
from vicissicalc.calc._protocol import CellResolver, FormulaFunction

__all__ = [
    "BINARY_OPS",
    "CalcError",
    "CellResolver",
    "CellState",
    "ErrorKind",
    "Evaluation",
    "FormulaFunction",
    "RecalcEngine",
    "Token",
    "TokenKind",
    "evaluate_formula",
    "find_formula",
    "scan",
    "tokenize",
]
