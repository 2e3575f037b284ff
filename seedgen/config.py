from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    project_root: Path = Path(__file__).resolve().parents[1]
    data_dir: Path = project_root / "data"
    lexicon_dir: Path = Path(__file__).resolve().parent / "lexicon" / "data"
    names_path: Path = lexicon_dir / "names.txt"
    words_path: Path = lexicon_dir / "words.txt"
    output_dir: Path = data_dir / "seeds"

    default_varchar_length: int = 100
    default_max_value: int = 1000


settings = Settings()
