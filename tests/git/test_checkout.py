"""Tests for working copy handling."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from guideindex.git.checkout import Checkout
from guideindex.git.repository import GitError


def test_local_checkout_is_left_in_place(tmp_path: Path) -> None:
    with Checkout.local(tmp_path) as checkout:
        assert checkout.path == tmp_path.resolve()
        assert not checkout.temporary

    assert checkout.closed
    assert tmp_path.exists()


def test_local_checkout_requires_directory(tmp_path: Path) -> None:
    with pytest.raises(NotADirectoryError):
        Checkout.local(tmp_path / "missing")


def test_clone_runs_git_and_removes_directory_on_close() -> None:
    calls = []

    def runner(args, *, cwd):  # type: ignore[no-untyped-def]
        argv = list(args)
        calls.append(argv)
        (Path(argv[-1]) / "_guides").mkdir()

    checkout = Checkout.clone("https://example.org/site.git", "develop", runner=runner)

    assert checkout.temporary
    assert (checkout.path / "_guides").is_dir()
    assert calls[0][:5] == ["git", "clone", "--quiet", "--branch", "develop"]
    assert calls[0][5] == "https://example.org/site.git"

    checkout.close()
    checkout.close()

    assert not checkout.path.exists()


def test_failed_clone_cleans_up() -> None:
    created = []

    def runner(args, *, cwd):  # type: ignore[no-untyped-def]
        argv = list(args)
        created.append(Path(argv[-1]))
        raise subprocess.CalledProcessError(128, argv)

    with pytest.raises(GitError, match="Failed to clone"):
        Checkout.clone("https://example.org/missing.git", "develop", runner=runner)

    assert created and not created[0].exists()
