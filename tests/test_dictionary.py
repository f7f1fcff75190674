from pathlib import Path

from wordboard.core.assets import get_wordlist_path
from wordboard.core.dictionary import Dictionary


def test_lookup_is_case_insensitive() -> None:
    d = Dictionary(["Cat", " dog ", ""])
    assert d.contains("CAT")
    assert "dog" in d
    assert not d.contains("")
    assert d.count() == len(d) == 2


def test_missing_file_gives_empty_dictionary(tmp_path: Path) -> None:
    path = tmp_path / "missing.txt"
    d = Dictionary.from_path(path)
    assert len(d) == 0
    assert d.source == str(path)
    assert not d.contains("cat")


def test_bundled_wordlist() -> None:
    d = Dictionary.from_path(get_wordlist_path())
    assert d.contains("cat")
    assert d.contains("cats")
    assert not d.contains("xyz")
    assert d.source == get_wordlist_path()
