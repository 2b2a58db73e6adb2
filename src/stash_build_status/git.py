"""Read-only inspection of the local working copy."""

import logging
import re
import subprocess
from pathlib import Path

from .constants import COMMIT_SHA_LENGTH
from .exceptions import CommitResolutionError

logger = logging.getLogger("stash-build-status.git")

COMMIT_SHA_PATTERN = re.compile(rf"^[0-9a-f]{{{COMMIT_SHA_LENGTH}}}$")


def resolve_commit(repository_path: str | Path) -> str:
    """Return the full SHA of HEAD in the given working copy.

    Args:
        repository_path: Directory of the checked-out repository

    Returns:
        The 40 character commit SHA, without a trailing newline

    Raises:
        CommitResolutionError: If the path is not a repository, git is not
            installed, or git prints something other than a SHA
    """
    path = Path(repository_path)
    if not path.is_dir():
        raise CommitResolutionError(f"Repository path does not exist: {path}")

    cmd = ["git", "rev-parse", f"--short={COMMIT_SHA_LENGTH}", "HEAD"]
    logger.debug(f"Running {' '.join(cmd)} in {path}")

    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            cwd=path,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise CommitResolutionError(f"git executable not found: {e}") from e
    except subprocess.CalledProcessError as e:
        output = (e.stderr or e.stdout or "").strip()
        raise CommitResolutionError(
            f"git rev-parse failed in {path} (exit {e.returncode}): {output}"
        ) from e

    commit = result.stdout.removesuffix("\n")
    if not COMMIT_SHA_PATTERN.match(commit):
        raise CommitResolutionError(f"Unexpected git rev-parse output: {commit!r}")
    return commit
