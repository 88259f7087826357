#!filepath: tests/base_test/test_path.py
from liftform.utils.path import PathManager


def test_set_root_overrides(tmp_path):
    PathManager.set_root(tmp_path)

    assert PathManager.root() == tmp_path.resolve()
    PathManager.set_root(None)


def test_run_dir_layout(tmp_path):
    PathManager.set_root(tmp_path)

    assert PathManager.runs_dir() == tmp_path.resolve() / "runs"
    assert PathManager.run_dir("r1", "out") == tmp_path.resolve() / "out" / "r1"
    PathManager.set_root(None)


def test_absolute_output_dir_ignores_root(tmp_path):
    PathManager.set_root(tmp_path / "elsewhere")

    assert PathManager.run_dir("r1", tmp_path / "abs") == tmp_path / "abs" / "r1"
    PathManager.set_root(None)
