"""Semantic Versioning 2.0.0 parsing and formatting.

The parser validates each component separately so that a failure names the
offending component, e.g. ``patch component is not numeric``, instead of
only reporting that the whole string is invalid.
"""

from semver_bump_check import errors, models
from semver_bump_check.models import semantic_version

NUMERIC = semantic_version.NUMERIC_PATTERN
IDENTIFIER = semantic_version.IDENTIFIER_PATTERN
CORE_COMPONENTS = ('major', 'minor', 'patch')


def parse(value: str) -> models.SemanticVersion:
    """Parse a string into a SemanticVersion.

    Args:
        value: Version string in ``MAJOR.MINOR.PATCH[-PRE][+BUILD]`` form

    Returns:
        The parsed version

    Raises:
        errors.InvalidSemver: If any component violates the SemVer grammar

    """
    if not value:
        raise errors.InvalidSemver(value, 'version', 'version string is empty')
    if value != value.strip():
        raise errors.InvalidSemver(
            value, 'version', 'version string has surrounding whitespace'
        )

    remainder, has_build, build = value.partition('+')
    core, has_pre_release, pre_release = remainder.partition('-')

    parts = core.split('.')
    if len(parts) != len(CORE_COMPONENTS):
        raise errors.InvalidSemver(
            value,
            'version',
            f'expected MAJOR.MINOR.PATCH but found {len(parts)} '
            f'dot-separated component{"s" if len(parts) != 1 else ""}',
        )
    major, minor, patch = (
        _parse_numeric(value, name, part)
        for name, part in zip(CORE_COMPONENTS, parts, strict=True)
    )

    return models.SemanticVersion(
        major=major,
        minor=minor,
        patch=patch,
        pre_release=_parse_identifiers(
            value, 'pre-release', pre_release, has_pre_release
        ),
        build_metadata=_parse_identifiers(
            value, 'build metadata', build, has_build
        ),
    )


def format(version: models.SemanticVersion) -> str:  # noqa: A001
    """Render a SemanticVersion in its canonical string form."""
    return str(version)


def _parse_numeric(value: str, name: str, part: str) -> int:
    if not part:
        raise errors.InvalidSemver(value, name, f'{name} component is empty')
    if not NUMERIC.fullmatch(part):
        raise errors.InvalidSemver(
            value, name, f'{name} component is not numeric: {part!r}'
        )
    if len(part) > 1 and part.startswith('0'):
        raise errors.InvalidSemver(
            value, name, f'{name} component has a leading zero: {part!r}'
        )
    return int(part)


def _parse_identifiers(
    value: str, name: str, section: str, present: str
) -> tuple[str, ...]:
    """Validate the dot-separated identifiers of a pre-release or build."""
    if not present:
        return ()
    if not section:
        raise errors.InvalidSemver(
            value, name, f'{name} is empty after the separator'
        )
    identifiers = tuple(section.split('.'))
    for position, identifier in enumerate(identifiers, start=1):
        if not identifier:
            raise errors.InvalidSemver(
                value, name, f'{name} identifier {position} is empty'
            )
        if not IDENTIFIER.fullmatch(identifier):
            raise errors.InvalidSemver(
                value,
                name,
                f'{name} identifier {identifier!r} contains characters '
                f'outside [0-9A-Za-z-]',
            )
        if (
            name == 'pre-release'
            and NUMERIC.fullmatch(identifier)
            and len(identifier) > 1
            and identifier.startswith('0')
        ):
            raise errors.InvalidSemver(
                value,
                name,
                f'numeric {name} identifier {identifier!r} has a leading '
                f'zero',
            )
    return identifiers
