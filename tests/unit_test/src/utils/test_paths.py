from pathlib import Path

from src.utils.paths import find_project_root, project_root


def test_finds_parent_with_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text("")
    nested = tmp_path / "src" / "utils"
    nested.mkdir(parents=True)
    assert find_project_root(nested) == tmp_path


def test_falls_back_to_working_directory(tmp_path, monkeypatch):
    """Without a marker file (regular install), the working directory is used."""
    nested = tmp_path / "site-packages" / "src" / "utils"
    nested.mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    assert find_project_root(nested) == Path.cwd()


def test_repo_root_detected():
    assert (project_root / "pyproject.toml").exists()
