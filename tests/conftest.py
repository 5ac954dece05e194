"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from tests.helpers.repos import (
    UPSTREAM_HEAD,
    UPSTREAM_V1_0,
    UPSTREAM_V1_1,
    create_test_files,
    git_add_and_commit,
    git_tag,
    init_git_repo,
)


@pytest.fixture
def upstream_repo(tmp_path: Path) -> dict[str, object]:
    """Create an upstream git repository with tagged and untagged commits.

    Returns:
        Mapping with "path" (repository root) and "revs" (list of the three
        commit IDs, oldest first).
    """
    repo = tmp_path / "upstream"
    repo.mkdir()
    init_git_repo(repo)

    create_test_files(repo, UPSTREAM_V1_0)
    c1 = git_add_and_commit(repo, "first", date="2019-01-02T03:04:05Z")
    git_tag(repo, "v1.0.0")

    create_test_files(repo, UPSTREAM_V1_1)
    c2 = git_add_and_commit(repo, "second", date="2019-02-03T04:05:06Z")
    git_tag(repo, "v1.1.0")
    git_tag(repo, "release-2019")

    create_test_files(repo, UPSTREAM_HEAD)
    c3 = git_add_and_commit(repo, "third", date="2019-03-04T05:06:07Z")

    return {"path": repo, "revs": [c1, c2, c3]}


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at an empty location and chdir to tmp_path.

    Keeps tests independent of the user's own configuration files.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    return tmp_path
