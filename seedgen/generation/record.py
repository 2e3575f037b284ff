from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

import numpy as np

from seedgen.config import Settings, settings as default_settings
from seedgen.lexicon.provider import LexiconProvider
from seedgen.sql.insert import get_insert_query_text


class ColumnSpecError(KeyError):
    pass


class ColumnType(Enum):
    NAME = "name"
    WORDS = "words"
    VARCHAR = "varchar"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> "ColumnType":
        try:
            return cls(str(tag).lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class TypeDescriptor:
    type: ColumnType
    length: int | None = None
    max: float | None = None

    @classmethod
    def from_mapping(cls, column: str, spec: Mapping[str, Any]) -> "TypeDescriptor":
        if "type" not in spec:
            raise ColumnSpecError(f"column {column!r} has no 'type'")
        return cls(
            type=ColumnType.from_tag(spec["type"]),
            length=_bound(column, "length", spec.get("length"), int),
            max=_bound(column, "max", spec.get("max"), float),
        )


def _bound(column: str, key: str, value: Any, cast: Callable[[Any], Any]):
    """None or "" leaves the bound unset; anything else must cast cleanly."""
    if value is None or value == "":
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ColumnSpecError(
            f"column {column!r}: {key} must be a number, got {value!r}"
        ) from None


# Marks a column that gets no value at all (left out of the record)
OMIT = object()

VARCHAR_ALPHABET = np.array(list(string.ascii_letters + string.digits))


def _name(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> str:
    return lexicon.next_name()


def _words(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> str:
    return lexicon.random_words(desc.length or 1)


def _varchar(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> str:
    n = desc.length or cfg.default_varchar_length
    return "".join(rng.choice(VARCHAR_ALPHABET, size=n))


def _boolean(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> bool:
    return bool(rng.uniform() < 0.5)


def _integer(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> int:
    upper = desc.max or cfg.default_max_value
    return int(round(rng.uniform() * upper))


def _float(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> float:
    upper = desc.max or cfg.default_max_value
    return float(rng.uniform() * upper)


def _date(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> object:
    return OMIT


def _unknown(
    desc: TypeDescriptor, lexicon: LexiconProvider, rng: np.random.Generator, cfg: Settings
) -> None:
    return None


GENERATORS: dict[ColumnType, Callable[..., Any]] = {
    ColumnType.NAME: _name,
    ColumnType.WORDS: _words,
    ColumnType.VARCHAR: _varchar,
    ColumnType.BOOLEAN: _boolean,
    ColumnType.INTEGER: _integer,
    ColumnType.FLOAT: _float,
    ColumnType.DATE: _date,
    ColumnType.UNKNOWN: _unknown,
}


def parse_columns(columns: Mapping[str, Mapping[str, Any]]) -> dict[str, TypeDescriptor]:
    return {col: TypeDescriptor.from_mapping(col, spec) for col, spec in columns.items()}


def generate_record(
    columns: Mapping[str, Mapping[str, Any]],
    lexicon: LexiconProvider,
    rng: np.random.Generator,
    cfg: Settings = default_settings,
) -> dict[str, Any]:
    """Build one record for columns. Date columns are left out of the result."""
    record: dict[str, Any] = {}
    for col, desc in parse_columns(columns).items():
        value = GENERATORS[desc.type](desc, lexicon, rng, cfg)
        if value is not OMIT:
            record[col] = value
    return record


class RecordGenerator:
    def __init__(
        self,
        lexicon: LexiconProvider,
        rng: np.random.Generator | None = None,
        cfg: Settings = default_settings,
    ) -> None:
        self.lexicon = lexicon
        self.rng = rng if rng is not None else lexicon.rng
        self.cfg = cfg

    def record(self, columns: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
        return generate_record(columns, self.lexicon, self.rng, self.cfg)

    def seed_record(self, columns: Mapping[str, Mapping[str, Any]], table_name: str) -> str:
        """One literal INSERT statement for a freshly generated record."""
        record = self.record(columns)
        if not record:
            raise ColumnSpecError(f"{table_name}: no column produces a value")
        return get_insert_query_text(record, table_name)
