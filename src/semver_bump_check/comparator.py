"""Classification of the transition between two semantic versions."""

from semver_bump_check import models


def compare(
    previous: models.SemanticVersion, current: models.SemanticVersion
) -> models.ComparisonVerdict:
    """Classify the transition from ``previous`` to ``current``.

    Build metadata is ignored. A higher ``current`` version is classified
    by the highest-order component that changed; when major, minor and
    patch are identical only the pre-release part can account for the
    increase.

    The comparator does not decide whether a verdict is acceptable, see
    ``checker.evaluate`` for the policy.
    """
    result = current.compare(previous)
    if result == 0:
        return models.Unchanged(previous=previous, current=current)
    if result < 0:
        return models.Downgrade(previous=previous, current=current)

    if current.major != previous.major:
        kind = models.BumpKind.major
    elif current.minor != previous.minor:
        kind = models.BumpKind.minor
    elif current.patch != previous.patch:
        kind = models.BumpKind.patch
    else:
        kind = models.BumpKind.pre_release
    return models.Bump(previous=previous, current=current, kind=kind)
