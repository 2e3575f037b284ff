from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class InsertQuery:
    """Parameterised INSERT: SQL text with $n placeholders plus the bound values."""

    text: str
    values: tuple


def properties_to_csv(mapping: Mapping[str, Any]) -> str:
    return ",".join(mapping.keys())


def render_value(value: Any) -> str:
    """Render one value as a SQL literal. Embedded single quotes are doubled."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        return repr(float(value))
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    raise TypeError(f"cannot render {type(value).__name__} as a SQL literal")


def values_to_csv(mapping: Mapping[str, Any]) -> str:
    return ",".join(render_value(v) for v in mapping.values())


def placeholders_to_csv(n: int) -> str:
    return ",".join(f"${i}" for i in range(1, n + 1))


def values_to_list(mapping: Mapping[str, Any]) -> list:
    return [mapping[k] for k in mapping]


def _parse_number(value: Any):
    """Return value as int/float if it reads as a finite number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    # int()/float() also take non-ASCII digits and digit separators
    if not text or not text.isascii() or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def remove_empty_fields(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return a copy of mapping without empty fields, with numeric values coerced.

    - booleans are kept as they are
    - anything that reads as a nonzero number becomes an int or float
    - the digit "0" (surrounding whitespace allowed) and numeric 0 become 0
    - "" and None are dropped
    - any other string is kept verbatim
    """
    out: dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, bool):
            out[key] = value
            continue

        number = _parse_number(value)
        if number:
            out[key] = number
        elif number is not None and (not isinstance(value, str) or value.strip() == "0"):
            out[key] = 0
        elif value is None or value == "":
            continue
        else:
            out[key] = value
    return out


def get_insert_query_text(mapping: Mapping[str, Any], table_name: str) -> str:
    return (
        f"INSERT INTO {table_name} ({properties_to_csv(mapping)}) "
        f"VALUES ({values_to_csv(mapping)});"
    )


def get_insert_query(
    mapping: Mapping[str, Any], table_name: str, return_record: bool = True
) -> InsertQuery:
    fields = remove_empty_fields(mapping)
    returning = " RETURNING *" if return_record else ""
    text = (
        f"INSERT INTO {table_name} ({properties_to_csv(fields)}) "
        f"VALUES ({placeholders_to_csv(len(fields))}){returning};"
    )
    return InsertQuery(text=text, values=tuple(values_to_list(fields)))
