import pytest

from xvkit.fsutils import DIRSIZ, basename, find, fmtname, ls, main_find, main_ls


@pytest.mark.parametrize("path,name", [("a/b/c", "c"), ("plain", "plain"), ("dir/", ""), ("/x", "x")])
def test_basename(path, name):
    assert basename(path) == name


def test_fmtname_pads_short_names():
    result = fmtname("a/b/hello")
    assert len(result) == DIRSIZ
    assert result.rstrip() == "hello"


def test_fmtname_keeps_long_names():
    assert fmtname("dir/abcdefghijklmnop") == "abcdefghijklmnop"


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.c").write_text("x")
    (tmp_path / "b.txt").write_text("yy")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.c").write_text("z")
    return tmp_path


def test_find_matches_whole_names(tree):
    found = set(find(str(tree), "a.c"))
    assert found == {f"{tree}/a.c\n", f"{tree}/sub/a.c\n"}


def test_find_pattern_is_anchored(tree):
    assert list(find(str(tree), "a")) == []


def test_find_star_matches_every_file(tree):
    assert len(list(find(str(tree), ".*"))) == 3


def test_find_missing_path(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert list(find(str(missing), "x")) == []
    assert capsys.readouterr().err == f"find: cannot open {missing}\n"


def test_ls_file(tree):
    path = f"{tree}/b.txt"
    (line,) = list(ls(path))
    assert line.startswith(fmtname(path) + " ")
    fields = line.split()
    assert fields[1] == "2"
    assert fields[3] == str(len("yy"))


def test_ls_directory_lists_dot_entries(tree):
    lines = list(ls(str(tree)))
    assert lines[0].startswith(fmtname(".") + " 1 ")
    assert lines[1].startswith(fmtname("..") + " 1 ")
    assert len(lines) == 2 + 3
    assert any(line.startswith(fmtname("sub") + " 1 ") for line in lines)


def test_ls_missing(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert list(ls(str(missing))) == []
    assert capsys.readouterr().err == f"ls: cannot open {missing}\n"


def test_main_find_usage(capsys):
    assert main_find([]) == 1
    assert capsys.readouterr().err == "usage: find path pattern\n"


def test_main_find_prints(tree, capsys):
    assert main_find([str(tree), "b.txt"]) == 0
    assert capsys.readouterr().out == f"{tree}/b.txt\n"


def test_main_ls_prints(tree, capsys):
    assert main_ls([f"{tree}/a.c"]) == 0
    assert capsys.readouterr().out.startswith(fmtname("a.c"))