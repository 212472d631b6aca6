"""Git tree lookups and lazily read blobs."""

from __future__ import annotations

import io
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional

from ..logging import get_logger

_LOGGER = get_logger("git")

GitRunner = Callable[..., bytes]


class GitError(RuntimeError):
    """Raised when a git command fails for reasons other than a missing path."""


class ContentNotFoundError(LookupError):
    """Raised when a bound content path does not exist in its tree."""

    def __init__(self, tree: str, path: str) -> None:
        super().__init__(f"{path} does not exist in tree {tree}")
        self.tree = tree
        self.path = path


class GitRepository:
    """Runs read-only git commands against a local repository."""

    def __init__(self, path: Path, runner: GitRunner | None = None) -> None:
        self.path = path
        self._runner = runner or self._default_runner
        self._closed = False

    def __enter__(self) -> "GitRepository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def rev_parse_tree(self, ref: str) -> Optional[str]:
        """Return the tree id of ``ref``, or None when the ref does not exist."""
        try:
            output = self._run(["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{tree}}"])
        except subprocess.CalledProcessError as exc:
            # --verify --quiet exits with 1 for unknown refs only
            if exc.returncode == 1:
                return None
            raise GitError(f"Failed to resolve {ref} in {self.path}: {exc}") from exc
        tree = output.decode("utf-8").strip()
        return tree or None

    def resolve_tree(self, *refs: str) -> str:
        """Return the tree id of the first existing ref."""
        for ref in refs:
            tree = self.rev_parse_tree(ref)
            if tree is not None:
                _LOGGER.debug("Resolved %s to tree %s", ref, tree)
                return tree
        raise GitError(f"None of the refs {', '.join(refs)} exist in {self.path}")

    def has_path(self, tree: str, path: str) -> bool:
        try:
            output = self._run(["git", "ls-tree", tree, "--", path])
        except subprocess.CalledProcessError as exc:
            raise GitError(f"Failed to list {path} in tree {tree}: {exc}") from exc
        return bool(output.strip())

    def read_blob(self, tree: str, path: str) -> bytes:
        """Return the bytes of ``path`` in ``tree``."""
        if not self.has_path(tree, path):
            raise ContentNotFoundError(tree, path)
        try:
            return self._run(["git", "cat-file", "blob", f"{tree}:{path}"])
        except subprocess.CalledProcessError as exc:
            raise GitError(f"Failed to read {path} from tree {tree}: {exc}") from exc

    def _run(self, args: Iterable[str]) -> bytes:
        if self._closed:
            raise GitError(f"Repository {self.path} is closed")
        return self._runner(args, cwd=self.path)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> bytes:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            capture_output=True,
        )
        return completed.stdout


@dataclass(frozen=True)
class ContentProvider:
    """A path bound to a tree snapshot; nothing is read until asked."""

    repository: GitRepository
    tree: str
    path: str

    def read_bytes(self) -> bytes:
        return self.repository.read_blob(self.tree, self.path)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding)

    def open(self) -> BinaryIO:
        return io.BytesIO(self.read_bytes())


__all__ = [
    "ContentNotFoundError",
    "ContentProvider",
    "GitError",
    "GitRepository",
    "GitRunner",
]
