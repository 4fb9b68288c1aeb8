import pytest

from xvkit.layout import MAXARG
from xvkit.xargs import MAXBUF, build_argvs, split_lines


@pytest.mark.parametrize(
    "data,lines",
    [
        ("a\nb\n", ["a", "b"]),
        ("\n\na\nb", ["a", "b"]),
        ("a\n\nb", ["a", "", "b"]),
        ("a\n\n", ["a", ""]),
        ("", []),
        ("\n\n", []),
        ("single", ["single"]),
    ],
)
def test_split_lines(data, lines):
    assert split_lines(data) == lines


def test_split_lines_reads_one_buffer():
    (line,) = split_lines("x" * (MAXBUF * 2))
    assert len(line) == MAXBUF


def test_split_lines_too_many():
    with pytest.raises(ValueError):
        split_lines("a\n" * (MAXARG + 1))


def test_split_lines_at_limit():
    assert len(split_lines("a\n" * MAXARG)) == MAXARG


def test_build_argvs_appends_line():
    assert build_argvs(["echo", "bye"], "hello\ntoo\n") == [
        ["echo", "bye", "hello"],
        ["echo", "bye", "too"],
    ]


def test_build_argvs_without_command():
    with pytest.raises(ValueError):
        build_argvs([], "a\n")


def test_build_argvs_no_input():
    assert build_argvs(["echo"], "") == []