"""Parsing of imported statement text.

Turns loosely structured statement lines into ParsedEntry records using a
small tokenizer; malformed lines are skipped.
"""

from ledger.parsers.statement_text import (
    LineFormatError,
    StatementTextParser,
    parse_statement_text,
)

__all__ = [
    "LineFormatError",
    "StatementTextParser",
    "parse_statement_text",
]
