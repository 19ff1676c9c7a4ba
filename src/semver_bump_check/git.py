"""Read-only access to version files in a git repository.

The reader is modelled as the ``RevisionStore`` protocol with a single
``read`` operation so the check pipeline can run against any snapshot
provider. ``GitRevisionStore`` implements it by shelling out to the git
executable; it never runs a command that modifies the repository.
"""

import asyncio
import logging
import os
import pathlib
import typing

from semver_bump_check import errors, models

LOGGER = logging.getLogger(__name__)


class RevisionStore(typing.Protocol):
    """Capability to read a file at a given revision."""

    async def read(
        self, path: str | pathlib.Path, selector: models.RevisionSelector
    ) -> models.RawFileContent:
        """Return the content of ``path`` at ``selector``.

        Raises:
            errors.VersionFileNotFound: If the file does not exist at the
                requested revision
            errors.RepositoryError: If the repository can not be read

        """
        ...


async def _run_git_command(
    command: list[str], cwd: pathlib.Path
) -> tuple[int, bytes, str]:
    """Run a git command and return its exit code, stdout and stderr.

    Args:
        command: Command and arguments, starting with ``git``
        cwd: Working directory for the command

    Raises:
        errors.RepositoryError: If the git executable can not be started

    """
    LOGGER.debug('Running git command: %s', ' '.join(command))
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            env={**os.environ, 'LC_ALL': 'C'},
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise errors.RepositoryError(
            f'Unable to run git in {cwd}: {exc}'
        ) from exc
    stdout, stderr = await process.communicate()
    stderr_str = stderr.decode('utf-8', errors='replace').strip()
    LOGGER.debug('git exit code: %s', process.returncode)
    if stderr_str:
        LOGGER.debug('git stderr: %s', stderr_str)
    return process.returncode, stdout, stderr_str


class GitRevisionStore:
    """Reads version files from a git working tree and its history.

    ``current`` reads the file from the working tree. ``previous_commit``
    reads it from the first parent of ``HEAD``.
    """

    def __init__(self, working_directory: pathlib.Path) -> None:
        self.working_directory = working_directory

    async def read(
        self, path: str | pathlib.Path, selector: models.RevisionSelector
    ) -> models.RawFileContent:
        relative = self._relative_path(pathlib.Path(path))
        match selector:
            case models.RevisionSelector.current:
                content = self._read_working_tree(relative)
            case models.RevisionSelector.previous_commit:
                content = await self._read_previous_commit(relative)
            case _:
                raise RuntimeError(f'Unsupported revision: {selector}')
        LOGGER.debug(
            'Read %i bytes from %s at %s', len(content), relative, selector
        )
        return models.RawFileContent(
            path=relative.as_posix(), selector=selector, content=content
        )

    def _relative_path(self, path: pathlib.Path) -> pathlib.Path:
        """Express ``path`` relative to the working directory.

        The result may climb out of the working directory with ``..``, git
        rejects paths that leave the repository itself.
        """
        if not path.is_absolute():
            return path
        return pathlib.Path(
            os.path.relpath(path.resolve(), self.working_directory.resolve())
        )

    def _read_working_tree(self, path: pathlib.Path) -> bytes:
        try:
            return (self.working_directory / path).read_bytes()
        except FileNotFoundError as exc:
            raise errors.VersionFileNotFound(
                path.as_posix(), models.RevisionSelector.current
            ) from exc
        except OSError as exc:
            raise errors.RepositoryError(
                f'Unable to read {path}: {exc}'
            ) from exc

    async def _read_previous_commit(self, path: pathlib.Path) -> bytes:
        await self._ensure_work_tree()
        head = await self._resolve_commit('HEAD')
        if head is None:
            raise errors.RepositoryError(
                f'HEAD does not point to a commit in {self.working_directory}'
            )
        parent = await self._resolve_commit(f'{head}^1')
        if parent is None:
            raise errors.RepositoryError(
                f'HEAD ({head[:12]}) has no parent commit'
            )
        LOGGER.debug('Previous commit for %s is %s', head[:12], parent[:12])

        # ./ makes git resolve the path relative to the working directory
        object_name = f'{parent}:./{path.as_posix()}'
        returncode, stdout, stderr = await _run_git_command(
            ['git', 'cat-file', '-t', object_name], self.working_directory
        )
        if returncode != 0 and 'outside repository' in stderr:
            raise errors.RepositoryError(
                f'{path} is outside of the repository: {stderr}'
            )
        if returncode != 0:
            raise errors.VersionFileNotFound(
                path.as_posix(), models.RevisionSelector.previous_commit
            )
        object_type = stdout.decode('utf-8').strip()
        if object_type != 'blob':
            raise errors.RepositoryError(
                f'{path} is a {object_type} in commit {parent[:12]}, '
                f'not a file'
            )

        returncode, stdout, stderr = await _run_git_command(
            ['git', 'cat-file', 'blob', object_name], self.working_directory
        )
        if returncode != 0:
            raise errors.RepositoryError(
                f'Unable to read {path} from commit {parent[:12]}: {stderr}'
            )
        return stdout

    async def _ensure_work_tree(self) -> None:
        returncode, stdout, stderr = await _run_git_command(
            ['git', 'rev-parse', '--is-inside-work-tree'],
            self.working_directory,
        )
        if returncode != 0 or stdout.strip() != b'true':
            raise errors.RepositoryError(
                f'{self.working_directory} is not inside a git work tree'
                + (f': {stderr}' if stderr else '')
            )

    async def _resolve_commit(self, revision: str) -> str | None:
        """Return the commit SHA for ``revision`` or None if it is absent."""
        returncode, stdout, _stderr = await _run_git_command(
            [
                'git',
                'rev-parse',
                '--verify',
                '--quiet',
                f'{revision}^{{commit}}',
            ],
            self.working_directory,
        )
        if returncode != 0:
            return None
        return stdout.decode('utf-8').strip()
