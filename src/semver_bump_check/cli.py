"""Command line interface for semver-bump-check.

Parses arguments into a Configuration, runs the check pipeline against the
git repository and renders the result or error as log output and an exit
status.
"""

import argparse
import asyncio
import enum
import logging
import pathlib
import sys

import pydantic

from semver_bump_check import checker, errors, git, models, version

LOGGER = logging.getLogger(__name__)

LOG_FORMAT = '%(message)s'
VERBOSE_LOG_FORMAT = '%(asctime)s %(levelname) -8s %(name) -30s %(message)s'


class ExitCode(enum.IntEnum):
    """Process exit status per outcome category."""

    ok = 0
    usage = 2
    unchanged = 3
    downgrade = 4
    pre_release_rejected = 5
    invalid_semver = 6
    extraction_error = 7
    repository_error = 8
    missing_in_previous_commit = 9
    missing_in_working_tree = 10


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    parser = _build_parser()
    return parser.parse_args(args)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sbc',
        description=(
            'Verify that a version file was bumped according to Semantic '
            'Versioning since the previous commit'
        ),
    )
    parser.add_argument(
        '--repository',
        type=pathlib.Path,
        default=pathlib.Path('.'),
        metavar='DIR',
        help='Git working tree containing the version file (default: .)',
    )
    parser.add_argument(
        '--require-previous',
        action='store_true',
        help='Fail when the version file is missing from the previous '
        'commit instead of accepting it as the initial version',
    )
    parser.add_argument(
        '--reject-pre-release',
        action='store_true',
        help='Fail when only the pre-release part of the version increased',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='Verbose logging output'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {version.__version__}',
    )

    subparsers = parser.add_subparsers(
        dest='command', metavar='{json,plain}', required=True
    )
    json_parser = subparsers.add_parser(
        'json', help='Use for JSON version file'
    )
    json_parser.add_argument(
        '-f', '--file', required=True, help='Sets the JSON file'
    )
    json_parser.add_argument(
        '-k',
        '--key',
        required=True,
        help='Sets the key in the JSON file, nested keys are delimited by '
        '"." or "/"',
    )
    plain_parser = subparsers.add_parser(
        'plain', help='Use for plain version file'
    )
    plain_parser.add_argument(
        '-f', '--file', required=True, help='Sets the plain text file'
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=VERBOSE_LOG_FORMAT if verbose else LOG_FORMAT,
        force=True,
    )


def build_configuration(args: argparse.Namespace) -> models.Configuration:
    """Build the run configuration from parsed arguments.

    Raises:
        pydantic.ValidationError: If the arguments fail validation

    """
    match args.command:
        case 'json':
            mode = {'kind': 'json', 'key_path': args.key}
        case 'plain':
            mode = {'kind': 'plain'}
        case _:
            raise RuntimeError(f'Unsupported command: {args.command}')
    return models.Configuration.model_validate(
        {
            'file': args.file,
            'mode': mode,
            'repository': args.repository,
            'policy': {
                'allow_initial': not args.require_previous,
                'accept_pre_release': not args.reject_pre_release,
            },
            'verbose': args.verbose,
        }
    )


def report(result: models.CheckResult) -> ExitCode:
    """Log the check result and return the matching exit code."""
    if result.verdict is None:
        LOGGER.info(
            'No previous version found, accepting %s as the initial '
            'version 🚀',
            result.current,
        )
        return ExitCode.ok

    match result.verdict:
        case models.Bump() if result.accepted:
            LOGGER.info(
                'Current version is greater than the previous one 🚀🚀🚀'
            )
            LOGGER.debug(
                '%s bump from %s to %s',
                result.verdict.kind,
                result.previous,
                result.current,
            )
            return ExitCode.ok
        case models.Bump():
            LOGGER.error(
                'Current version (%s) only changes the pre-release of the '
                'previous version (%s), which is not allowed 🦆',
                result.current,
                result.previous,
            )
            return ExitCode.pre_release_rejected
        case models.Unchanged():
            exit_code = ExitCode.unchanged
        case models.Downgrade():
            exit_code = ExitCode.downgrade
        case _:
            raise RuntimeError(f'Unsupported verdict: {result.verdict!r}')
    LOGGER.error(
        'Current version (%s) is not greater than previous version (%s) 🦆',
        result.current,
        result.previous,
    )
    return exit_code


async def _check(configuration: models.Configuration) -> models.CheckResult:
    store = git.GitRevisionStore(configuration.repository)
    return await checker.VersionBumpChecker(store, configuration).check()


def main(args: list[str] | None = None) -> int:
    parsed = parse_args(args)
    configure_logging(parsed.verbose)
    try:
        configuration = build_configuration(parsed)
    except pydantic.ValidationError as exc:
        LOGGER.error('Invalid arguments: %s', exc)
        return ExitCode.usage

    LOGGER.debug(
        'Checking %s (%s) in %s',
        configuration.file,
        configuration.mode.kind,
        configuration.repository,
    )
    try:
        result = asyncio.run(_check(configuration))
    except errors.InvalidSemver as exc:
        LOGGER.error(
            'Version does not adhere to semver 🙈 (%r: %s)',
            exc.value,
            exc.reason,
        )
        return ExitCode.invalid_semver
    except errors.ExtractionError as exc:
        LOGGER.error(
            'Unable to extract version from %s: %s', configuration.file, exc
        )
        return ExitCode.extraction_error
    except errors.VersionFileNotFound as exc:
        LOGGER.error('Version file not found: %s', exc)
        if exc.selector == models.RevisionSelector.current:
            return ExitCode.missing_in_working_tree
        return ExitCode.missing_in_previous_commit
    except errors.RepositoryError as exc:
        LOGGER.error('Repository error: %s', exc)
        return ExitCode.repository_error
    return report(result)


def run() -> None:
    sys.exit(main())
