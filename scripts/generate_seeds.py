import argparse
import logging
from pathlib import Path

from seedgen.pipelines.write_seeds import DEFAULT_TABLES, SeedConfig, load_table_requests, run


def main() -> None:
    parser = argparse.ArgumentParser(description="Write SQL seed files for a list of tables")
    parser.add_argument("--config", type=Path, help="JSON list of table requests")
    parser.add_argument("--out", type=Path, help="directory for the .sql files")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg = SeedConfig(seed=args.seed)
    if args.out is not None:
        cfg = SeedConfig(seed=args.seed, output_dir=args.out)
    requests = load_table_requests(args.config) if args.config else DEFAULT_TABLES

    counts = run(cfg, requests)
    print(f"✅ Seed files written to {cfg.output_dir}:")
    for k, v in counts.items():
        print(f"  - {k}.sql: {v} records")


if __name__ == "__main__":
    main()
