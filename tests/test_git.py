"""Tests for the git module against throw-away repositories."""

import os
import pathlib
import shutil
import subprocess
import tempfile
import unittest
from unittest import mock

from semver_bump_check import errors, git, models
from tests import base

CURRENT = models.RevisionSelector.current
PREVIOUS = models.RevisionSelector.previous_commit


@unittest.skipUnless(shutil.which('git'), 'git is not installed')
class GitRevisionStoreTestCase(base.AsyncTestCase):
    """Test cases for GitRevisionStore."""

    def setUp(self) -> None:
        super().setUp()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = pathlib.Path(self.temp_dir.name)
        self.repository = self.root / 'repository'
        self.repository.mkdir()
        self.enterContext(
            mock.patch.dict(
                os.environ, {'GIT_CEILING_DIRECTORIES': str(self.root)}
            )
        )
        self.store = git.GitRevisionStore(self.repository)

    def tearDown(self) -> None:
        super().tearDown()
        self.temp_dir.cleanup()

    def _git(self, *args: str) -> None:
        subprocess.run(  # noqa: S603
            [
                'git',
                '-c',
                'user.name=Test Author',
                '-c',
                'user.email=test@example.com',
                '-c',
                'commit.gpgsign=false',
                *args,
            ],
            cwd=self.repository,
            check=True,
            capture_output=True,
        )

    def _commit(self, files: dict[str, str], message: str) -> None:
        for name, content in files.items():
            path = self.repository / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        self._git('add', '--all')
        self._git('commit', '--quiet', '--allow-empty', '-m', message)

    async def test_read_current_from_working_tree(self) -> None:
        self._git('init', '--quiet')
        self._commit({'VERSION': '1.0.0\n'}, 'Initial')
        (self.repository / 'VERSION').write_text('1.1.0\n')

        result = await self.store.read('VERSION', CURRENT)

        self.assertEqual(result.content, b'1.1.0\n')
        self.assertEqual(result.selector, CURRENT)
        self.assertEqual(result.path, 'VERSION')

    async def test_read_previous_commit(self) -> None:
        self._git('init', '--quiet')
        self._commit({'VERSION': '1.0.0\n'}, 'Initial')
        self._commit({'VERSION': '1.1.0\n'}, 'Bump')
        (self.repository / 'VERSION').write_text('2.0.0\n')

        result = await self.store.read('VERSION', PREVIOUS)

        self.assertEqual(result.content, b'1.0.0\n')
        self.assertEqual(result.selector, PREVIOUS)

    async def test_read_nested_path(self) -> None:
        self._git('init', '--quiet')
        self._commit({'pkg/package.json': '{"version": "1.0.0"}'}, 'Initial')
        self._commit({'pkg/package.json': '{"version": "1.0.1"}'}, 'Bump')

        previous = await self.store.read('pkg/package.json', PREVIOUS)
        current = await self.store.read(
            pathlib.Path('pkg') / 'package.json', CURRENT
        )

        self.assertEqual(previous.content, b'{"version": "1.0.0"}')
        self.assertEqual(current.content, b'{"version": "1.0.1"}')

    async def test_read_absolute_path(self) -> None:
        self._git('init', '--quiet')
        self._commit({'VERSION': '1.0.0'}, 'Initial')
        self._commit({'VERSION': '1.0.1'}, 'Bump')

        result = await self.store.read(self.repository / 'VERSION', PREVIOUS)

        self.assertEqual(result.path, 'VERSION')
        self.assertEqual(result.content, b'1.0.0')

    async def test_store_in_subdirectory(self) -> None:
        """Test paths resolve against a working directory below the root."""
        self._git('init', '--quiet')
        self._commit({'pkg/VERSION': '1.0.0'}, 'Initial')
        self._commit({'pkg/VERSION': '1.0.1'}, 'Bump')
        store = git.GitRevisionStore(self.repository / 'pkg')

        previous = await store.read('VERSION', PREVIOUS)
        current = await store.read('VERSION', CURRENT)

        self.assertEqual(previous.content, b'1.0.0')
        self.assertEqual(current.content, b'1.0.1')

    async def test_sibling_path_from_subdirectory(self) -> None:
        """Test files elsewhere in the repository are reachable."""
        self._git('init', '--quiet')
        self._commit(
            {'pkg/README': 'hello', 'other/VERSION': '1.0.0'}, 'Initial'
        )
        self._commit({'other/VERSION': '1.1.0'}, 'Bump')
        store = git.GitRevisionStore(self.repository / 'pkg')
        absolute = self.repository / 'other' / 'VERSION'

        for path in (absolute, '../other/VERSION'):
            with self.subTest(path=path):
                previous = await store.read(path, PREVIOUS)
                current = await store.read(path, CURRENT)
                self.assertEqual(previous.path, '../other/VERSION')
                self.assertEqual(previous.content, b'1.0.0')
                self.assertEqual(current.content, b'1.1.0')

    async def test_path_outside_repository(self) -> None:
        self._git('init', '--quiet')
        self._commit({'VERSION': '1.0.0'}, 'Initial')
        self._commit({'VERSION': '1.0.1'}, 'Bump')
        (self.root / 'VERSION').write_text('1.0.0')

        with self.assertRaises(errors.RepositoryError) as context:
            await self.store.read(self.root / 'VERSION', PREVIOUS)
        self.assertIn('outside', str(context.exception))

    async def test_file_added_in_head(self) -> None:
        self._git('init', '--quiet')
        self._commit({'README': 'hello'}, 'Initial')
        self._commit({'VERSION': '0.1.0'}, 'Add version')

        with self.assertRaises(errors.VersionFileNotFound) as context:
            await self.store.read('VERSION', PREVIOUS)
        self.assertEqual(context.exception.selector, PREVIOUS)
        self.assertEqual(context.exception.path, 'VERSION')

    async def test_missing_in_working_tree(self) -> None:
        self._git('init', '--quiet')
        with self.assertRaises(errors.VersionFileNotFound) as context:
            await self.store.read('VERSION', CURRENT)
        self.assertEqual(context.exception.selector, CURRENT)

    async def test_directory_in_previous_commit(self) -> None:
        self._git('init', '--quiet')
        self._commit({'pkg/VERSION': '1.0.0'}, 'Initial')
        self._commit({'pkg/VERSION': '1.0.1'}, 'Bump')

        with self.assertRaises(errors.RepositoryError) as context:
            await self.store.read('pkg', PREVIOUS)
        self.assertIn('tree', str(context.exception))

    async def test_first_commit_has_no_parent(self) -> None:
        self._git('init', '--quiet')
        self._commit({'VERSION': '1.0.0'}, 'Initial')

        with self.assertRaises(errors.RepositoryError) as context:
            await self.store.read('VERSION', PREVIOUS)
        self.assertIn('no parent commit', str(context.exception))

    async def test_repository_without_commits(self) -> None:
        self._git('init', '--quiet')
        (self.repository / 'VERSION').write_text('1.0.0')

        with self.assertRaises(errors.RepositoryError) as context:
            await self.store.read('VERSION', PREVIOUS)
        self.assertIn('does not point to a commit', str(context.exception))

    async def test_not_a_repository(self) -> None:
        (self.repository / 'VERSION').write_text('1.0.0')

        with self.assertRaises(errors.RepositoryError) as context:
            await self.store.read('VERSION', PREVIOUS)
        self.assertIn('not inside a git work tree', str(context.exception))

    async def test_missing_git_executable(self) -> None:
        with mock.patch(
            'asyncio.create_subprocess_exec',
            side_effect=FileNotFoundError('git'),
        ):
            with self.assertRaises(errors.RepositoryError):
                await self.store.read('VERSION', PREVIOUS)

    async def test_read_is_read_only(self) -> None:
        """Test reading history leaves HEAD and the index untouched."""
        self._git('init', '--quiet')
        self._commit({'VERSION': '1.0.0'}, 'Initial')
        self._commit({'VERSION': '1.0.1'}, 'Bump')
        head = (self.repository / '.git' / 'HEAD').read_text()
        index = (self.repository / '.git' / 'index').read_bytes()

        await self.store.read('VERSION', PREVIOUS)

        self.assertEqual((self.repository / '.git' / 'HEAD').read_text(), head)
        self.assertEqual(
            (self.repository / '.git' / 'index').read_bytes(), index
        )
