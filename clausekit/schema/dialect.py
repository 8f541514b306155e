"""Pydantic models for the DialectProfile consumed by the query builders.

A DialectProfile lists the modifier keywords a dialect accepts for each
statement kind (``SELECT DISTINCT``, ``INSERT IGNORE``, ``UPDATE OR FAIL``,
...) and the subsets kept when a statement is assembled.  Builders consult
it to filter modifiers: unknown keywords are dropped, never rejected.

Create a profile through the builder::

    from clausekit import DialectProfile

    profile = (
        DialectProfile.builder("mysql")
        .select_modes("ALL", "DISTINCT", "DISTINCTROW", slot="duplicates")
        .select_modes("SQL_CACHE", "SQL_NO_CACHE", slot="cache")
        .update_modes("LOW_PRIORITY", "IGNORE")
        .lock_modes("FOR UPDATE")
        .build()
    )

Slots
-----
Keywords registered under the same slot are mutually exclusive: setting
``ALL`` after ``DISTINCT`` replaces it.  Keywords without a slot accumulate.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from clausekit.errors import ProfileConfigError

#: keyword -> slot name (``None`` = no slot, keywords accumulate).
ModeTable = dict[str, str | None]


class DialectProfile(BaseModel):
    """Modifier allow-lists and assembly filters for one SQL dialect.

    Always created via :meth:`builder` in application code.

    Attributes:
        name: Dialect name (``'sql'``, ``'mysql'``, ``'mariadb'``,
            ``'sqlite'``).
        select_modes: Keywords accepted by ``select_mode()``.
        insert_modes: Keywords accepted by ``insert_mode()``.
        replace_modes: Keywords accepted by ``replace_mode()``.  REPLACE
            shares the INSERT modifier buffer.
        update_modes: Keywords accepted by ``update_mode()``.
        delete_modes: Keywords accepted by ``delete_mode()``.
        lock_modes: Locking reads accepted by ``lock_mode()``.
        insert_select_modes: Insert modifiers kept for ``INSERT ... SELECT``.
            ``None`` keeps all.
        replace_query_modes: Insert modifiers kept for REPLACE statements.
            ``None`` keeps all.
        update_query_modes: Update modifiers kept for UPDATE statements.
            ``None`` keeps all.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "sql"
    select_modes: ModeTable = Field(default_factory=dict)
    insert_modes: ModeTable = Field(default_factory=dict)
    replace_modes: ModeTable = Field(default_factory=dict)
    update_modes: ModeTable = Field(default_factory=dict)
    delete_modes: ModeTable = Field(default_factory=dict)
    lock_modes: list[str] = Field(default_factory=list)
    insert_select_modes: list[str] | None = None
    replace_query_modes: list[str] | None = None
    update_query_modes: list[str] | None = None

    @classmethod
    def builder(cls, name: str) -> "DialectProfileBuilder":
        """Return a :class:`DialectProfileBuilder` for dialect ``name``."""
        return DialectProfileBuilder(name)


class DialectProfileBuilder:
    """Fluent builder for :class:`DialectProfile`.

    Always obtained via :meth:`DialectProfile.builder`.  Every method may be
    called repeatedly; keywords are upper-cased.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._tables: dict[str, ModeTable] = {
            "select_modes": {},
            "insert_modes": {},
            "replace_modes": {},
            "update_modes": {},
            "delete_modes": {},
        }
        self._lock_modes: list[str] = []
        self._filters: dict[str, list[str] | None] = {
            "insert_select_modes": None,
            "replace_query_modes": None,
            "update_query_modes": None,
        }

    def select_modes(self, *keywords: str, slot: str | None = None) -> "DialectProfileBuilder":
        return self._add("select_modes", keywords, slot)

    def insert_modes(self, *keywords: str, slot: str | None = None) -> "DialectProfileBuilder":
        return self._add("insert_modes", keywords, slot)

    def replace_modes(self, *keywords: str, slot: str | None = None) -> "DialectProfileBuilder":
        return self._add("replace_modes", keywords, slot)

    def update_modes(self, *keywords: str, slot: str | None = None) -> "DialectProfileBuilder":
        return self._add("update_modes", keywords, slot)

    def delete_modes(self, *keywords: str, slot: str | None = None) -> "DialectProfileBuilder":
        return self._add("delete_modes", keywords, slot)

    def lock_modes(self, *modes: str) -> "DialectProfileBuilder":
        for mode in modes:
            if mode.upper() not in self._lock_modes:
                self._lock_modes.append(mode.upper())
        return self

    def keep_for_insert_select(self, *keywords: str) -> "DialectProfileBuilder":
        """Restrict insert modifiers on ``INSERT ... SELECT`` statements."""
        self._filters["insert_select_modes"] = [k.upper() for k in keywords]
        return self

    def keep_for_replace(self, *keywords: str) -> "DialectProfileBuilder":
        """Restrict insert modifiers on REPLACE statements."""
        self._filters["replace_query_modes"] = [k.upper() for k in keywords]
        return self

    def keep_for_update(self, *keywords: str) -> "DialectProfileBuilder":
        """Restrict update modifiers on UPDATE statements."""
        self._filters["update_query_modes"] = [k.upper() for k in keywords]
        return self

    def build(self) -> DialectProfile:
        """Validate the configuration and return the :class:`DialectProfile`.

        Raises:
            ProfileConfigError: When a keyword is blank or an assembly filter
                names a keyword the matching mutator can never store.
        """
        self._validate()
        return DialectProfile(
            name=self._name,
            lock_modes=list(self._lock_modes),
            **{field: dict(table) for field, table in self._tables.items()},
            **self._filters,
        )

    def _add(
        self,
        field: str,
        keywords: tuple[str, ...],
        slot: str | None,
    ) -> "DialectProfileBuilder":
        table = self._tables[field]
        for keyword in keywords:
            table[keyword.upper()] = slot
        return self

    # ------------------------------------------------------------------
    # Internal validation
    # ------------------------------------------------------------------

    def _validate(self) -> None:
        """Raise :class:`ProfileConfigError` for invalid configurations.

        Rules
        -----
        ``name`` must not be blank.

        Keywords must not be blank.

        ``insert_select_modes`` ⊆ ``insert_modes``
            The filter applies to the INSERT modifier buffer.

        ``replace_query_modes`` ⊆ ``insert_modes`` ∪ ``replace_modes``
            REPLACE shares the INSERT modifier buffer.

        ``update_query_modes`` ⊆ ``update_modes``
        """
        if not self._name.strip():
            raise ProfileConfigError("Dialect name must not be empty.", field="name")

        for field, table in self._tables.items():
            if any(not keyword.strip() for keyword in table):
                raise ProfileConfigError(
                    f"{field} contains an empty keyword.", field=field
                )
        if any(not mode.strip() for mode in self._lock_modes):
            raise ProfileConfigError("lock_modes contains an empty keyword.", field="lock_modes")

        sources = {
            "insert_select_modes": set(self._tables["insert_modes"]),
            "replace_query_modes": set(self._tables["insert_modes"])
            | set(self._tables["replace_modes"]),
            "update_query_modes": set(self._tables["update_modes"]),
        }
        for field, allowed in sources.items():
            kept = self._filters[field]
            if kept is None:
                continue
            unknown = sorted(set(kept) - allowed)
            if unknown:
                raise ProfileConfigError(
                    f"{field} keeps keywords that can never be set: {unknown}.",
                    field=field,
                )


# ---------------------------------------------------------------------------
# Built-in profiles
# ---------------------------------------------------------------------------

SQL_PROFILE: DialectProfile = (
    DialectProfile.builder("sql")
    .select_modes("ALL", "DISTINCT", slot="duplicates")
    .build()
)

MYSQL_PROFILE: DialectProfile = (
    DialectProfile.builder("mysql")
    .select_modes("ALL", "DISTINCT", "DISTINCTROW", slot="duplicates")
    .select_modes("SQL_CACHE", "SQL_NO_CACHE", slot="cache")
    .select_modes(
        "HIGH_PRIORITY",
        "STRAIGHT_JOIN",
        "SQL_SMALL_RESULT",
        "SQL_BIG_RESULT",
        "SQL_BUFFER_RESULT",
        "SQL_CALC_FOUND_ROWS",
    )
    .insert_modes("IGNORE", slot="errors")
    .insert_modes("HIGH_PRIORITY", "LOW_PRIORITY", "DELAYED", slot="priority")
    .replace_modes("IGNORE", slot="errors")
    .replace_modes("HIGH_PRIORITY", "LOW_PRIORITY", "DELAYED", slot="priority")
    .update_modes("LOW_PRIORITY", "IGNORE")
    .delete_modes("LOW_PRIORITY", "QUICK", "IGNORE")
    .lock_modes("FOR UPDATE", "LOCK IN SHARE MODE")
    .keep_for_insert_select("HIGH_PRIORITY", "LOW_PRIORITY", "IGNORE")
    .keep_for_replace("LOW_PRIORITY", "DELAYED")
    .keep_for_update("LOW_PRIORITY", "IGNORE")
    .build()
)

MARIADB_PROFILE: DialectProfile = MYSQL_PROFILE.model_copy(update={"name": "mariadb"})

_SQLITE_CONFLICT_MODES = ("OR ROLLBACK", "OR ABORT", "OR REPLACE", "OR FAIL", "OR IGNORE")

SQLITE_PROFILE: DialectProfile = (
    DialectProfile.builder("sqlite")
    .select_modes("ALL", "DISTINCT", slot="duplicates")
    .insert_modes(*_SQLITE_CONFLICT_MODES, slot="mode")
    .update_modes(*_SQLITE_CONFLICT_MODES, slot="mode")
    .build()
)
