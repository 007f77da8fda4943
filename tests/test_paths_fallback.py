from pathlib import Path

from ttt_engine.paths import data_dir, repo_root, score_file


def test_repo_root_prefers_cwd_when_no_git_and_no_env(tmp_path: Path, monkeypatch):
    # Ensure no env overrides
    monkeypatch.delenv("TTT_REPO_ROOT", raising=False)
    monkeypatch.delenv("TTT_DATA_DIR", raising=False)
    monkeypatch.delenv("TTT_SCORE_FILE", raising=False)

    # Simulate running in a directory with no .git present
    monkeypatch.chdir(tmp_path)
    import ttt_engine.paths as P

    monkeypatch.setattr(P, "_find_git_root", lambda start: None)

    assert repo_root() == tmp_path
    assert data_dir() == tmp_path / "data"
    assert score_file() == tmp_path / "data" / "scores.json"


def test_env_overrides_win(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTT_REPO_ROOT", str(tmp_path / "root"))
    monkeypatch.delenv("TTT_SCORE_FILE", raising=False)
    monkeypatch.setenv("TTT_DATA_DIR", str(tmp_path / "elsewhere"))
    assert repo_root() == tmp_path / "root"
    assert score_file() == tmp_path / "elsewhere" / "scores.json"
    monkeypatch.setenv("TTT_SCORE_FILE", str(tmp_path / "s.json"))
    assert score_file() == tmp_path / "s.json"
