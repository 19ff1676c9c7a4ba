"""Version bump check pipeline.

Reads the version file at the current and previous revisions, extracts and
parses both versions, classifies the transition and applies the policy.
"""

import asyncio
import logging

from semver_bump_check import (
    comparator,
    errors,
    extractor,
    git,
    models,
    versions,
)

LOGGER = logging.getLogger(__name__)


def evaluate(verdict: models.ComparisonVerdict, policy: models.Policy) -> bool:
    """Decide whether a comparison verdict passes the policy."""
    match verdict:
        case models.Bump(kind=models.BumpKind.pre_release):
            return policy.accept_pre_release
        case models.Bump():
            return True
        case models.Unchanged() | models.Downgrade():
            return False
        case _:
            raise RuntimeError(f'Unsupported verdict: {verdict!r}')


class VersionBumpChecker:
    """Checks that a version file was bumped since the previous commit."""

    def __init__(
        self,
        store: git.RevisionStore,
        configuration: models.Configuration,
    ) -> None:
        self.configuration = configuration
        self.store = store

    async def load_version(
        self, selector: models.RevisionSelector
    ) -> models.SemanticVersion:
        """Read, extract and parse the version at a single revision."""
        raw = await self.store.read(self.configuration.file, selector)
        value = extractor.extract(raw, self.configuration.mode)
        version = versions.parse(value)
        LOGGER.debug('Version at %s is %s', selector, version)
        return version

    async def check(self) -> models.CheckResult:
        """Compare the current version against the previous commit.

        Returns:
            The check result, with ``accepted`` set per the policy

        Raises:
            errors.SemverBumpCheckError: If either version can not be
                loaded, errors from the current revision take precedence

        """
        current, previous = await asyncio.gather(
            self.load_version(models.RevisionSelector.current),
            self.load_version(models.RevisionSelector.previous_commit),
            return_exceptions=True,
        )
        if isinstance(current, BaseException):
            raise current
        if isinstance(previous, errors.VersionFileNotFound):
            if not self.configuration.policy.allow_initial:
                raise previous
            LOGGER.info(
                '%s does not exist in the previous commit, accepting %s as '
                'the initial version',
                self.configuration.file,
                current,
            )
            return models.CheckResult(current=current, accepted=True)
        if isinstance(previous, BaseException):
            raise previous

        verdict = comparator.compare(previous, current)
        accepted = evaluate(verdict, self.configuration.policy)
        LOGGER.debug(
            'Verdict for %s -> %s: %s (accepted: %s)',
            previous,
            current,
            verdict.verdict,
            accepted,
        )
        return models.CheckResult(
            current=current,
            previous=previous,
            verdict=verdict,
            accepted=accepted,
        )
