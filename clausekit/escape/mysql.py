"""MySQL / MariaDB query escaper."""

from __future__ import annotations

from typing import Any

from pymysql.converters import escape_string

from clausekit.escape.base import QueryEscaper, nullable

_HINT_KEYWORDS = ("USE", "IGNORE", "FORCE")
_HINT_SCOPES = ("JOIN", "ORDER BY", "GROUP BY", "")


class PyMySQLStringEscaper:
    """String escaper backed by PyMySQL's ``escape_string``.

    Escapes quotes, backslashes, NUL, newlines and ``\\x1a`` the way
    ``mysql_real_escape_string`` does for a non-multibyte connection charset.
    Use a live ``pymysql.Connection`` instead when the connection runs with
    ``NO_BACKSLASH_ESCAPES``.
    """

    def escape_string(self, value: str) -> str:
        return escape_string(value)


class MySQLQueryEscaper(QueryEscaper):
    """Escapes identifiers and literals for MySQL and MariaDB.

    Identifiers are quoted with backticks.  Literals accept an optional
    charset introducer (``_utf8mb4 'text'``) and ``COLLATE`` clause.
    """

    IDENTIFIER_DELIMITER_L = "`"
    IDENTIFIER_DELIMITER_R = "`"

    def escape_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        literal = f"'{self._escape_string(value)}'"
        return f"{charset} {self._collate(literal, collation)}".strip()

    def hex_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        literal = f"UNHEX('{self._escape_string(value)}')"
        return f"{charset} {self._collate(literal, collation)}".strip()

    def uuid_value(self, value: Any, collation: str = "", charset: str = "") -> str:
        """Return a dashed UUID string as its 16-byte binary form."""
        literal = f"UNHEX(REPLACE('{self._escape_string(value)}', '-', ''))"
        return f"{charset} {self._collate(literal, collation)}".strip()

    def like_value(
        self,
        value: Any,
        match: str = "both",
        collation: str = "",
        charset: str = "",
    ) -> str:
        literal = self._like_pattern(self._escape_string(value), match)
        return f"{charset} {self._collate(literal, collation)}".strip()

    def geo_value(self, value: Any, srid: int | None = None) -> str:
        """Return a WKT geometry literal wrapped in ``ST_GeomFromText``."""
        args = [self.escape_value(value)]
        if srid is not None:
            args.append(str(int(srid)))
        return f"ST_GeomFromText({', '.join(args)})"

    def index_hint(self, keyword: str, indices: list[str], for_: str = "") -> str | None:
        """Return ``USE|IGNORE|FORCE INDEX [FOR scope] (idx, ...)``.

        Unknown keywords fall back to ``USE``; unknown scopes are dropped.
        """
        if not indices:
            return None

        keyword = keyword.upper()
        if keyword not in _HINT_KEYWORDS:
            keyword = "USE"
        if for_ not in _HINT_SCOPES:
            for_ = ""

        quoted = ", ".join(self.quote_qualified(index) for index in indices)
        if for_ == "":
            return f"{keyword} INDEX ({quoted})"
        return f"{keyword} INDEX FOR {for_} ({quoted})"

    def null_or_uuid_value(self, value: Any, collation: str = "", charset: str = "") -> str | None:
        return nullable(self.uuid_value)(value, collation, charset)

    def null_or_geo_value(self, value: Any, srid: int | None = None) -> str | None:
        return nullable(self.geo_value)(value, srid)
