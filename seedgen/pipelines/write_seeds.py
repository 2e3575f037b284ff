from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

import numpy as np

from seedgen.config import settings
from seedgen.generation.record import RecordGenerator, parse_columns
from seedgen.lexicon.provider import LexiconProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedConfig:
    # None draws fresh OS entropy on every run
    seed: int | None = None
    output_dir: Path = settings.output_dir


@dataclass(frozen=True)
class TableRequest:
    table_name: str
    columns: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    record_count: int = 200
    create_statement: str | None = None

    def __post_init__(self) -> None:
        if not self.table_name:
            raise ValueError("table request needs a table name")
        if self.record_count < 0:
            raise ValueError(f"{self.table_name}: record_count must be >= 0")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TableRequest":
        """Accepts both camelCase (tableName) and snake_case (table_name) keys."""

        def pick(camel: str, snake: str, default=None):
            return data.get(camel, data.get(snake, default))

        return cls(
            table_name=pick("tableName", "table_name"),
            columns=dict(data.get("columns", {})),
            record_count=int(pick("recordCount", "record_count", 200)),
            create_statement=pick("createStatement", "create_statement"),
        )


DEFAULT_TABLES = (
    TableRequest(
        table_name="users",
        columns={"name": {"type": "name", "length": 30}},
        record_count=2000,
    ),
    TableRequest(
        table_name="quizzes",
        columns={
            "title": {"type": "words", "length": 5},
            "user_id": {"type": "integer", "max": 100},
        },
        record_count=200,
    ),
    TableRequest(
        table_name="options",
        columns={
            "question_id": {"type": "integer", "max": 200},
            "content": {"type": "words", "length": 3},
        },
        record_count=1000,
    ),
)


def load_table_requests(path) -> list[TableRequest]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of table requests")
    return [TableRequest.from_mapping(item) for item in data]


def build_seed_text(request: TableRequest, generator: RecordGenerator) -> str:
    # Fail on a malformed column spec before generating anything
    parse_columns(request.columns)

    parts = []
    if request.create_statement:
        create = request.create_statement.rstrip().rstrip(";")
        parts.append(f"{create};\n")
    for _ in range(request.record_count):
        parts.append(generator.seed_record(request.columns, request.table_name) + "\n")
    return "".join(parts)


def write_seed_file(request: TableRequest, generator: RecordGenerator, output_dir=None) -> Path:
    out_dir = Path(output_dir) if output_dir is not None else settings.output_dir
    text = build_seed_text(request, generator)

    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{request.table_name}.sql"
    path.write_text(text, encoding="utf-8")
    logger.info("Wrote %d records for %s to %s", request.record_count, request.table_name, path)
    return path


def run(
    cfg: SeedConfig,
    requests: Iterable[TableRequest] = DEFAULT_TABLES,
    lexicon: LexiconProvider | None = None,
) -> dict[str, int]:
    rng = np.random.default_rng(cfg.seed)
    if lexicon is None:
        lexicon = LexiconProvider.from_settings(rng=rng)
    else:
        # words drawn for this run follow cfg.seed too
        lexicon.rng = rng
    generator = RecordGenerator(lexicon, rng=rng)

    counts = {}
    for request in requests:
        write_seed_file(request, generator, output_dir=cfg.output_dir)
        counts[request.table_name] = request.record_count
    return counts
