"""Tests for GitConfigStore."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from git_identity.domain.identity.model import Identity, Scope
from git_identity.domain.identity.service import IdentityRegistry
from git_identity.domain.shared.error import NotFoundError, StoreReadError, StoreWriteError
from git_identity.infrastructure.store import GitConfigStore
from git_identity.infrastructure.store.git import GitConfigEntry, parse_null_list

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestParseNullList:
    def test_entries_with_values(self):
        output = "user.name\nAlice\0user.a.email\na@x.com\0"

        assert parse_null_list(output) == [
            GitConfigEntry("user.name", "Alice"),
            GitConfigEntry("user.a.email", "a@x.com"),
        ]

    def test_value_with_newline(self):
        assert parse_null_list("alias.x\nline1\nline2\0") == [GitConfigEntry("alias.x", "line1\nline2")]

    def test_valueless_entry(self):
        assert parse_null_list("user.useconfigonly\0") == [GitConfigEntry("user.useconfigonly", None)]

    def test_empty_output(self):
        assert parse_null_list("") == []


class TestGitConfigStoreCommands:
    """Command lines and exit code mapping, with git mocked out."""

    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "config"
        path.write_text("")
        return path

    def test_get_runs_git_config(self, config_file: Path):
        runner = MagicMock(return_value=_completed(stdout="Alice\0"))
        store = GitConfigStore(config_file, runner=runner)

        assert store.get_string("user.a.name") == "Alice"
        command = runner.call_args.args[0]
        assert command == ["git", "config", "--file", str(config_file), "--null", "--get", "user.a.name"]

    def test_get_keeps_newlines_of_the_value(self, config_file: Path):
        """Only the NUL terminator is stripped, not newlines stored in the value."""
        runner = MagicMock(return_value=_completed(stdout="Alice\n\n\0"))

        assert GitConfigStore(config_file, runner=runner).get_string("user.a.name") == "Alice\n\n"

    def test_get_missing_key(self, config_file: Path):
        store = GitConfigStore(config_file, runner=MagicMock(return_value=_completed(returncode=1)))

        with pytest.raises(NotFoundError):
            store.get_string("user.name")

    def test_get_other_failure(self, config_file: Path):
        runner = MagicMock(return_value=_completed(returncode=3, stderr="error: invalid file"))

        with pytest.raises(StoreReadError):
            GitConfigStore(config_file, runner=runner).get_string("user.name")

    def test_set_failure(self, config_file: Path):
        runner = MagicMock(return_value=_completed(returncode=1, stderr="error: invalid key"))

        with pytest.raises(StoreWriteError) as exc_info:
            GitConfigStore(config_file, runner=runner).set_string("user.bad key", "x")

        assert "invalid key" in str(exc_info.value)

    def test_set_separates_options(self, config_file: Path):
        runner = MagicMock(return_value=_completed())

        GitConfigStore(config_file, runner=runner).set_string("user.a.name", "-dash")

        assert runner.call_args.args[0][-3:] == ["--", "user.a.name", "-dash"]

    def test_remove_missing_key(self, config_file: Path):
        store = GitConfigStore(config_file, runner=MagicMock(return_value=_completed(returncode=5)))

        with pytest.raises(NotFoundError):
            store.remove("user.name")

    def test_entries_filters_by_glob(self, config_file: Path):
        output = "user.name\nA\0user.a.name\nB\0core.bare\nfalse\0"
        store = GitConfigStore(config_file, runner=MagicMock(return_value=_completed(stdout=output)))

        assert [e.name for e in store.entries("user.*")] == ["user.name", "user.a.name"]

    def test_missing_file_is_empty(self, tmp_path: Path):
        runner = MagicMock()
        store = GitConfigStore(tmp_path / "absent", runner=runner)

        assert list(store.entries()) == []
        with pytest.raises(NotFoundError):
            store.get_string("user.name")
        runner.assert_not_called()

    def test_git_not_runnable(self, config_file: Path):
        runner = MagicMock(side_effect=FileNotFoundError("git"))

        with pytest.raises(StoreReadError):
            list(GitConfigStore(config_file, runner=runner).entries())


@requires_git
class TestGitConfigStoreWithGit:
    """Round trips through a real git executable."""

    def test_set_get_list_remove(self, tmp_path: Path):
        store = GitConfigStore(tmp_path / "gitconfig")

        store.set_string("user.work.client.name", "Alice")
        store.set_string("user.work.client.email", "a@x.com")
        store.set_string("user.name", "Active")

        assert store.get_string("user.work.client.name") == "Alice"
        assert sorted(e.name for e in store.entries("user.*.*")) == [
            "user.work.client.email",
            "user.work.client.name",
        ]

        store.remove("user.work.client.name")
        with pytest.raises(NotFoundError):
            store.get_string("user.work.client.name")
        with pytest.raises(NotFoundError):
            store.remove("user.work.client.name")

    def test_file_written_in_git_format(self, tmp_path: Path):
        path = tmp_path / "gitconfig"
        GitConfigStore(path).set_string("user.work.email", "a@x.com")

        text = path.read_text()
        assert '[user "work"]' in text
        assert "email = a@x.com" in text

    def test_variable_names_listed_lowercase(self, tmp_path: Path):
        store = GitConfigStore(tmp_path / "gitconfig")
        store.set_string("user.work.signingKey", "K")

        assert [e.name for e in store.entries()] == ["user.work.signingkey"]

    def test_trailing_newline_in_value_survives(self, tmp_path: Path):
        store = GitConfigStore(tmp_path / "gitconfig")
        store.set_string("user.a.name", "Alice\n")

        assert store.get_string("user.a.name") == "Alice\n"
        assert [e.value for e in store.entries("user.a.*")] == ["Alice\n"]

    def test_registry_round_trip_keeps_newlines(self, tmp_path: Path):
        """get agrees with identities for values ending in a newline."""
        registry = IdentityRegistry(GitConfigStore(tmp_path / "gitconfig"))
        identity = Identity(id="a", name="Alice\n", email="a@x.com")

        registry.add(Scope.GLOBAL, identity)

        assert registry.get(Scope.GLOBAL, "a") == identity
        assert registry.identities(Scope.GLOBAL) == [identity]
