from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np
import pytest

from seedgen.config import settings
from seedgen.lexicon.provider import LexiconError, LexiconProvider, load_lexicon


@pytest.fixture
def corpus_files(tmp_path):
    names = tmp_path / "names.txt"
    names.write_text("Ann\nBen\nCal\n", encoding="utf-8")
    words = tmp_path / "words.txt"
    words.write_text("alpha\nbeta\n\ngamma\ndelta\n", encoding="utf-8")
    return names, words


def test_load_lexicon_drops_blank_lines(corpus_files):
    _, words = corpus_files
    assert load_lexicon(words) == ("alpha", "beta", "gamma", "delta")


def test_load_lexicon_reads_file_once(corpus_files):
    names, _ = corpus_files
    first = load_lexicon(names)
    names.write_text("Zed\n", encoding="utf-8")
    assert load_lexicon(names) is first


def test_missing_corpus_is_fatal(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_lexicon(tmp_path / "nope.txt")


def test_empty_corpus_is_fatal(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("\n\n", encoding="utf-8")
    with pytest.raises(LexiconError):
        load_lexicon(empty)


def test_next_name_is_round_robin(corpus_files):
    names, words = corpus_files
    lex = LexiconProvider(load_lexicon(names), load_lexicon(words))
    seen = [lex.next_name() for _ in range(7)]
    assert seen == ["Ann", "Ben", "Cal", "Ann", "Ben", "Cal", "Ann"]


def test_providers_keep_separate_cursors(corpus_files):
    names, words = corpus_files
    a = LexiconProvider(load_lexicon(names), load_lexicon(words))
    b = LexiconProvider(load_lexicon(names), load_lexicon(words))
    a.next_name()
    a.next_name()
    assert b.next_name() == "Ann"


def test_random_words_samples_from_corpus(corpus_files):
    names, words = corpus_files
    lex = LexiconProvider(load_lexicon(names), load_lexicon(words), rng=np.random.default_rng(7))
    corpus = set(load_lexicon(words))
    for _ in range(200):
        tokens = lex.random_words(3).split(" ")
        assert len(tokens) == 3
        assert set(tokens) <= corpus


def test_random_words_reaches_last_entry(corpus_files):
    names, words = corpus_files
    lex = LexiconProvider(load_lexicon(names), load_lexicon(words), rng=np.random.default_rng(0))
    drawn = set(lex.random_words(400).split(" "))
    assert drawn == {"alpha", "beta", "gamma", "delta"}


def test_random_words_rejects_zero(corpus_files):
    names, words = corpus_files
    lex = LexiconProvider(load_lexicon(names), load_lexicon(words))
    with pytest.raises(ValueError):
        lex.random_words(0)


def test_bundled_corpora_load():
    lex = LexiconProvider.from_settings(settings)
    assert len(lex.names) > 100
    assert len(lex.words) > 500
    assert lex.next_name() == lex.names[0]


def test_bundled_corpora_ship_inside_the_package():
    import seedgen.lexicon.provider as provider

    package_data = Path(provider.__file__).resolve().parent / "data"
    assert settings.names_path == package_data / "names.txt"
    assert settings.words_path == package_data / "words.txt"
    assert load_lexicon(package_data / "names.txt")


def test_next_name_is_safe_across_threads(corpus_files):
    names, words = corpus_files
    lex = LexiconProvider(load_lexicon(names), load_lexicon(words))
    rounds, workers = 200, 6
    per_worker = rounds * len(lex.names) // workers

    with ThreadPoolExecutor(max_workers=workers) as pool:
        batches = list(
            pool.map(lambda _: [lex.next_name() for _ in range(per_worker)], range(workers))
        )

    counts = Counter(name for batch in batches for name in batch)
    assert counts == {name: rounds for name in lex.names}
