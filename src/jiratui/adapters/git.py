"""Git operations for the version control collaborator.

All functions are async to avoid blocking the event loop during subprocess calls.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from jiratui.core.models import BranchSummary
from jiratui.errors import ExitCode, GitOperationError, StartupError
from jiratui.limits import GIT_REMOTE_TIMEOUT

log = logging.getLogger(__name__)

FALLBACK_DEFAULT_BRANCH = "main"
_HEAD_SYMREF_PREFIX = "ref: refs/heads/"

# Git prompts read /dev/tty directly, so closing stdin does not stop them.
_NON_INTERACTIVE_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_SSH_COMMAND": "ssh -o BatchMode=yes",
}


async def _run_git(
    cwd: Path, args: list[str], *, timeout: float | None = None, interactive: bool = True
) -> tuple[int, str, str]:
    env = None if interactive else {**os.environ, **_NON_INTERACTIVE_ENV}
    try:
        proc = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=cwd,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL,
        )
    except FileNotFoundError:
        raise GitOperationError("git is not installed") from None
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        proc.kill()
        await proc.wait()
        raise GitOperationError(f"git {' '.join(args)} timed out after {timeout}s") from None
    returncode = proc.returncode if proc.returncode is not None else 1
    return returncode, stdout.decode(errors="replace"), stderr.decode(errors="replace")


class GitRepository:
    """A local repository, addressed by its work tree root."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    async def discover(cls, path: Path | None = None) -> GitRepository:
        """Find the repository containing ``path`` (default: the working directory)."""
        start = path or Path.cwd()
        try:
            returncode, stdout, stderr = await _run_git(start, ["rev-parse", "--show-toplevel"])
        except (GitOperationError, OSError) as exc:
            raise StartupError(
                f"Couldn't look for a git repository at {start}: {exc}",
                code=ExitCode.NO_REPOSITORY,
            ) from exc
        if returncode != 0 or not stdout.strip():
            raise StartupError(
                f"Couldn't find a git repository at {start}",
                code=ExitCode.NO_REPOSITORY,
                hint=stderr.strip() or "run jira-tui from inside a git work tree",
            )
        return cls(Path(stdout.strip()))

    async def _git(self, *args: str) -> str:
        returncode, stdout, stderr = await _run_git(self.root, list(args))
        if returncode != 0:
            raise GitOperationError(f"git {' '.join(args)} failed: {stderr.strip()}")
        return stdout

    async def local_branches(self) -> list[str]:
        stdout = await self._git("for-each-ref", "--format=%(refname:short)", "refs/heads/")
        return [line.strip() for line in stdout.splitlines() if line.strip()]

    async def find_branches(self, prefix: str) -> list[BranchSummary]:
        return [
            BranchSummary(name) for name in await self.local_branches() if name.startswith(prefix)
        ]

    async def branch_exists(self, name: str) -> bool:
        returncode, _, _ = await _run_git(
            self.root, ["show-ref", "--verify", "--quiet", f"refs/heads/{name}"]
        )
        return returncode == 0

    async def checkout_branch(self, name: str) -> None:
        await self._git("checkout", name)
        log.info("Checked out %s", name)

    async def default_branch(self) -> str:
        """The branch origin advertises as HEAD, or ``main`` when that can't be learned."""
        try:
            returncode, stdout, _ = await _run_git(
                self.root,
                ["ls-remote", "--symref", "origin", "HEAD"],
                timeout=GIT_REMOTE_TIMEOUT,
                interactive=False,
            )
        except GitOperationError as exc:
            log.info("Using %s as default branch: %s", FALLBACK_DEFAULT_BRANCH, exc)
            return FALLBACK_DEFAULT_BRANCH
        if returncode != 0:
            return FALLBACK_DEFAULT_BRANCH
        for line in stdout.splitlines():
            if line.startswith(_HEAD_SYMREF_PREFIX):
                ref = line[len(_HEAD_SYMREF_PREFIX) :].split("\t", 1)[0].strip()
                if ref:
                    return ref
        return FALLBACK_DEFAULT_BRANCH

    async def create_branch(self, name: str) -> None:
        """Create ``name`` from the default branch unless it exists, then switch to it."""
        if not await self.branch_exists(name):
            base = await self.default_branch()
            await self._git("branch", name, f"refs/heads/{base}")
            log.info("Created %s from %s", name, base)
        await self.checkout_branch(name)
