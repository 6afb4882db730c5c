"""Parser for free-form statement text.

Each useful line of an imported statement looks like::

    05/09/2025 - Ifood Delivery - R$ 1.045,90

The line is read by a small tokenizer rather than a single regular
expression:

    DATE SEP DESCRIPTION SEP AMOUNT [anything]

    DATE         DD/MM/YYYY, must be a real calendar date
    SEP          optional whitespace, "-", optional whitespace
    DESCRIPTION  shortest non-empty text followed by SEP and a valid AMOUNT
    AMOUNT       "R$", optional whitespace, digits with "." grouping and
                 "," as the decimal separator

Lines that don't fit are skipped; parsing is best-effort.
"""

import logging
import string
from collections.abc import Iterator
from datetime import date
from decimal import Decimal, InvalidOperation

from ledger.schemas.internal import ParsedEntry

logger = logging.getLogger(__name__)

CURRENCY_MARKER = "R$"
GROUPING_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
FIELD_SEPARATOR = "-"
# Column limits of transactions.title and transactions.amount.
DESCRIPTION_MAX_LENGTH = 255
AMOUNT_MAX_DIGITS = 14
AMOUNT_DECIMAL_PLACES = 2
AMOUNT_CHARS = frozenset(string.digits + GROUPING_SEPARATOR + DECIMAL_SEPARATOR)


class LineFormatError(ValueError):
    """Raised when a single statement line does not follow the grammar."""


class _Cursor:
    """Read position over one line of text."""

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def consume(self, literal: str) -> bool:
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def take(self, count: int) -> str:
        chunk = self.text[self.pos : self.pos + count]
        self.pos += len(chunk)
        return chunk

    def take_while(self, allowed: frozenset[str]) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in allowed:
            self.pos += 1
        return self.text[start : self.pos]


def _is_digits(value: str, length: int) -> bool:
    return len(value) == length and all(ch in string.digits for ch in value)


class StatementTextParser:
    """Turns a statement text blob into ParsedEntry records.

    Example:
        >>> parser = StatementTextParser()
        >>> entries = list(parser.parse("05/09/2025 - Uber - R$ 23,00"))
        >>> entries[0].amount
        Decimal('23.00')
    """

    def parse(self, text: str) -> Iterator[ParsedEntry]:
        """Lazily yield one entry per well-formed line, in input order.

        Blank lines are ignored and malformed lines are skipped without
        raising. The iterator is single-pass.
        """
        skipped = 0
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entry = self.parse_line(line)
            except LineFormatError as exc:
                skipped += 1
                # Line content can hold personal data; log position and reason only.
                logger.debug(
                    "Skipping unparsable statement line",
                    extra={"line_number": line_number, "reason": str(exc)},
                )
                continue
            yield entry

        if skipped:
            logger.info("Statement lines skipped", extra={"skipped_count": skipped})

    def parse_line(self, line: str) -> ParsedEntry:
        """Parse a single line.

        Raises:
            LineFormatError: If the line does not follow the grammar or holds
                an impossible date, an unreadable amount, or a value too large
                for the transactions table
        """
        cursor = _Cursor(line.strip())

        raw_date = self._read_date(cursor)
        self._read_separator(cursor)
        description, raw_amount = self._read_description_and_amount(cursor)
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise LineFormatError(f"Description longer than {DESCRIPTION_MAX_LENGTH} characters")

        return ParsedEntry(
            description=description,
            amount=self._parse_amount(raw_amount),
            date=self._parse_date(raw_date),
        )

    def _read_date(self, cursor: _Cursor) -> str:
        raw = cursor.take(10)
        day, month, year = raw[0:2], raw[3:5], raw[6:10]
        if raw[2:3] != "/" or raw[5:6] != "/":
            raise LineFormatError("Expected a DD/MM/YYYY date")
        if not (_is_digits(day, 2) and _is_digits(month, 2) and _is_digits(year, 4)):
            raise LineFormatError("Expected a DD/MM/YYYY date")
        return raw

    def _read_separator(self, cursor: _Cursor) -> None:
        cursor.skip_whitespace()
        if not cursor.consume(FIELD_SEPARATOR):
            raise LineFormatError("Expected '-' after the date")
        cursor.skip_whitespace()

    def _read_description_and_amount(self, cursor: _Cursor) -> tuple[str, str]:
        """Find the first separator that is followed by a currency amount.

        Everything before it is the description, so descriptions may contain
        dashes of their own.
        """
        text = cursor.text
        start = cursor.pos
        search_from = start + 1

        while True:
            dash = text.find(FIELD_SEPARATOR, search_from)
            if dash == -1:
                raise LineFormatError("Expected '- R$ <amount>' after the description")

            description = text[start:dash].strip()
            probe = _Cursor(text, dash + 1)
            probe.skip_whitespace()
            if description and probe.consume(CURRENCY_MARKER):
                probe.skip_whitespace()
                raw_amount = probe.take_while(AMOUNT_CHARS)
                if raw_amount:
                    cursor.pos = probe.pos
                    return description, raw_amount

            search_from = dash + 1

    def _parse_date(self, raw: str) -> date:
        """Convert DD/MM/YYYY into a calendar date."""
        day, month, year = raw.split("/")
        try:
            return date(int(year), int(month), int(day))
        except ValueError as exc:
            raise LineFormatError(f"Could not parse date: {exc}") from exc

    def _parse_amount(self, raw: str) -> Decimal:
        """Convert "1.234,56" into Decimal("1234.56")."""
        normalized = raw.replace(GROUPING_SEPARATOR, "").replace(DECIMAL_SEPARATOR, ".")
        try:
            amount = Decimal(normalized)
        except InvalidOperation as exc:
            raise LineFormatError("Could not parse amount") from exc
        if not amount.is_finite():
            raise LineFormatError("Could not parse amount")

        _, digits, exponent = amount.as_tuple()
        decimal_places = max(-exponent, 0)
        if decimal_places > AMOUNT_DECIMAL_PLACES:
            raise LineFormatError(f"Amount has more than {AMOUNT_DECIMAL_PLACES} decimal places")
        if len(digits) - decimal_places + AMOUNT_DECIMAL_PLACES > AMOUNT_MAX_DIGITS:
            raise LineFormatError(f"Amount has more than {AMOUNT_MAX_DIGITS} digits")
        return amount


def parse_statement_text(text: str) -> Iterator[ParsedEntry]:
    """Convenience wrapper around StatementTextParser().parse()."""
    return StatementTextParser().parse(text)
