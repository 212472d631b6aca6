"""Working copies of the site's source branch."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Iterable

from ..logging import get_logger
from .repository import GitError

_LOGGER = get_logger("git.checkout")


class Checkout:
    """A working copy directory, deleted on close when it was cloned for this run."""

    def __init__(self, path: Path, *, temporary: bool = False) -> None:
        self.path = path
        self.temporary = temporary
        self._closed = False

    @classmethod
    def local(cls, path: Path) -> "Checkout":
        """Use an existing working copy; it is left untouched on close."""
        resolved = path.expanduser().resolve()
        if not resolved.is_dir():
            raise NotADirectoryError(f"Working copy not found: {path}")
        return cls(resolved)

    @classmethod
    def clone(
        cls,
        uri: str,
        branch: str,
        *,
        runner: Callable[..., object] | None = None,
    ) -> "Checkout":
        """Clone ``uri`` with ``branch`` checked out into a temporary directory."""
        run = runner or _default_runner
        target = Path(tempfile.mkdtemp(prefix="guideindex-"))
        _LOGGER.info("Cloning %s (%s) into %s", uri, branch, target)
        try:
            run(["git", "clone", "--quiet", "--branch", branch, uri, str(target)], cwd=target.parent)
        except subprocess.CalledProcessError as exc:
            shutil.rmtree(target, ignore_errors=True)
            raise GitError(f"Failed to clone {uri}: {exc}") from exc
        except BaseException:
            shutil.rmtree(target, ignore_errors=True)
            raise
        return cls(target, temporary=True)

    def __enter__(self) -> "Checkout":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.temporary and self.path.exists():
            _LOGGER.debug("Removing temporary checkout %s", self.path)
            shutil.rmtree(self.path)


def _default_runner(args: Iterable[str], *, cwd: Path) -> None:
    subprocess.run(list(args), cwd=str(cwd), check=True, capture_output=True)


__all__ = ["Checkout"]
