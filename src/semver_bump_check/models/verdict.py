"""Comparison verdict and check result models.

A verdict is a closed set of variants discriminated by the ``verdict``
field. Callers match on the variant classes:

    match verdict:
        case models.Bump(kind=models.BumpKind.major):
            ...
        case models.Unchanged() | models.Downgrade():
            ...
"""

import enum
import typing

import pydantic

from semver_bump_check.models import semantic_version


class BumpKind(enum.StrEnum):
    """Highest-order version component that increased."""

    major = 'major'
    minor = 'minor'
    patch = 'patch'
    pre_release = 'pre-release'


class _Verdict(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    previous: semantic_version.SemanticVersion
    current: semantic_version.SemanticVersion


class Unchanged(_Verdict):
    """Both revisions carry the same version, ignoring build metadata."""

    verdict: typing.Literal['unchanged'] = 'unchanged'


class Bump(_Verdict):
    """The current version has higher precedence than the previous one."""

    verdict: typing.Literal['bump'] = 'bump'
    kind: BumpKind


class Downgrade(_Verdict):
    """The current version has lower precedence than the previous one."""

    verdict: typing.Literal['downgrade'] = 'downgrade'


ComparisonVerdict = typing.Annotated[
    Unchanged | Bump | Downgrade, pydantic.Field(discriminator='verdict')
]


class CheckResult(pydantic.BaseModel):
    """Outcome of checking a version file against the previous commit.

    ``previous`` and ``verdict`` are only ``None`` when the file did not
    exist in the previous commit and the policy accepted it as an initial
    version.
    """

    current: semantic_version.SemanticVersion
    previous: semantic_version.SemanticVersion | None = None
    verdict: ComparisonVerdict | None = None
    accepted: bool

    @property
    def is_initial(self) -> bool:
        return self.previous is None
