"""SQLite query escaper."""
from __future__ import annotations

from typing import Any

from clausekit.escape.base import QueryEscaper

_HINT_KEYWORDS = ("INDEXED BY", "NOT INDEXED")


class QuoteDoublingStringEscaper:
    """SQL-standard string escaper: single quotes are doubled.

    This is the only escaping SQLite string literals need.
    """

    def escape_string(self, value: str) -> str:
        return value.replace("'", "''")


class SQLiteQueryEscaper(QueryEscaper):
    """Escapes identifiers and literals for SQLite.

    Identifiers are quoted with double quotes.  SQLite has no charset
    introducers; the ``charset`` argument is accepted and ignored.
    """

    IDENTIFIER_DELIMITER_L = '"'
    IDENTIFIER_DELIMITER_R = '"'

    def escape_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        return self._collate(f"'{self._escape_string(value)}'", collation).strip()

    def hex_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        return self.escape_value(value, collation, charset)

    def like_value(
        self,
        value: Any,
        match: str = "both",
        collation: str = "",
        charset: str = "",
    ) -> str:
        literal = self._like_pattern(self._escape_string(value), match)
        return self._collate(literal, collation).strip()

    def index_hint(self, keyword: str, indices: list[str], for_: str = "") -> str | None:
        """Return ``INDEXED BY idx`` / ``NOT INDEXED``.

        Unknown keywords fall back to ``INDEXED BY``; ``for_`` is unused.
        """
        if not indices:
            return None

        keyword = keyword.upper()
        if keyword not in _HINT_KEYWORDS:
            keyword = "INDEXED BY"
        if keyword == "NOT INDEXED":
            return keyword

        quoted = ", ".join(self.quote_qualified(index) for index in indices)
        return f"{keyword} {quoted}"
