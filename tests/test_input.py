import pytest

pytest.importorskip("tkinter")

from treeviz.main import parse_values  # noqa: E402


def test_parse_mixed_separators():
    assert parse_values("7, 3 18,,2") == ([7, 3, 18, 2], [])


def test_parse_rejects_bad_tokens():
    values, rejected = parse_values("5 abc -1 1000 999 4.5")
    assert values == [5, 999]
    assert rejected == ["abc", "-1", "1000", "4.5"]


def test_parse_empty():
    assert parse_values("   ") == ([], [])
