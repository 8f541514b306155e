"""Clause identifiers and the small value types the builders keep state in.

``Clause``
    Names every per-statement buffer.  Builders hold their buffers in a
    single ``dict[Clause, ...]`` so clause-generic routines (conditions,
    grouping, query assembly) select a buffer by key instead of by
    attribute name.

``Condition``
    The three clauses that accept predicates.  ``ON`` predicates are written
    into the ``JOIN`` buffer.

``JoinState``
    Per-join ON/USING exclusivity state machine.

``ModeList``
    Ordered modifier keywords (``DISTINCT``, ``LOW_PRIORITY``, ...).
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum


class Clause(str, Enum):
    """Per-statement clause buffers."""

    SELECT = "select"
    SELECT_MODE = "select_mode"
    RETURNING = "returning"
    UPDATE = "update"
    UPDATE_MODE = "update_mode"
    DELETE = "delete"
    DELETE_MODE = "delete_mode"
    INTO = "into"
    INSERT_MODE = "insert_mode"
    SET = "set"
    COLUMN_NAMES = "column_names"
    VALUES = "values"
    UPSERT = "upsert"
    SELECT_STATEMENT = "select_statement"
    FROM = "from"
    JOIN = "join"
    WHERE = "where"
    HAVING = "having"
    GROUP_BY = "group_by"
    ORDER_BY = "order_by"
    LIMIT = "limit"
    COMPOUND = "compound"
    LOCK_MODE = "lock_mode"

    @property
    def is_mode(self) -> bool:
        """True for the clauses that hold a :class:`ModeList`."""
        return self in _MODE_CLAUSES


_MODE_CLAUSES = frozenset(
    {Clause.SELECT_MODE, Clause.UPDATE_MODE, Clause.DELETE_MODE, Clause.INSERT_MODE}
)


class Condition(str, Enum):
    """Clauses that accept predicates and logical groups."""

    WHERE = "WHERE"
    HAVING = "HAVING"
    ON = "ON"

    @property
    def target(self) -> Clause:
        """The buffer predicates of this kind are written into."""
        return _CONDITION_TARGETS[self]


_CONDITION_TARGETS: dict[Condition, Clause] = {
    Condition.WHERE: Clause.WHERE,
    Condition.HAVING: Clause.HAVING,
    Condition.ON: Clause.JOIN,
}


class JoinState(Enum):
    """Qualification state of the most recent JOIN.

    FRESH
        No join is waiting for a qualifier (no join yet, or a NATURAL join).
    AWAITING_CONDITION
        A join was opened and has neither ON nor USING yet.
    BOUND_ON
        The join is qualified with ON; USING calls are ignored.
    BOUND_USING
        The join is qualified with USING; ON calls are ignored.
    """

    FRESH = "fresh"
    AWAITING_CONDITION = "awaiting_condition"
    BOUND_ON = "on"
    BOUND_USING = "using"


class ModeList:
    """Ordered list of modifier keywords with optional named slots.

    A keyword added under a slot replaces the keyword previously held by the
    same slot, keeping its position.  Keywords added without a slot are
    appended.  Rendering collapses duplicates, keeping first-seen order.

    Example::

        modes = ModeList()
        modes.add("DISTINCT", slot="duplicates")
        modes.add("SQL_CACHE", slot="cache")
        modes.add("ALL", slot="duplicates")
        modes.render()  # 'ALL SQL_CACHE'
    """

    def __init__(self, modes: Iterable[str] = ()) -> None:
        self._modes: dict[str, str] = {}
        for mode in modes:
            self.add(mode)

    def add(self, mode: str, slot: str | None = None) -> None:
        key = slot if slot is not None else f"#{len(self._modes)}"
        self._modes[key] = mode

    def keep(self, allowed: Iterable[str] | None) -> ModeList:
        """Return a copy holding only the keywords in ``allowed``.

        ``None`` means no restriction.
        """
        copy = ModeList()
        if allowed is None:
            copy._modes = dict(self._modes)
            return copy
        allowed = set(allowed)
        copy._modes = {k: v for k, v in self._modes.items() if v in allowed}
        return copy

    def render(self) -> str:
        return " ".join(dict.fromkeys(self._modes.values()))

    def __iter__(self) -> Iterator[str]:
        return iter(self._modes.values())

    def __len__(self) -> int:
        return len(self._modes)

    def __bool__(self) -> bool:
        return bool(self._modes)

    def __repr__(self) -> str:
        return f"ModeList({list(self._modes.values())!r})"
