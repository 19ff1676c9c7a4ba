"""Semantic version model.

Holds the parsed components of a Semantic Versioning 2.0.0 string.
Precedence is delegated to the ``semver`` library so that ordering follows
the SemVer rules exactly; build metadata never takes part in equality or
ordering.
"""

import re
import typing

import pydantic
import semver

NUMERIC_PATTERN = re.compile(r'[0-9]+')
IDENTIFIER_PATTERN = re.compile(r'[0-9A-Za-z-]+')


class SemanticVersion(pydantic.BaseModel):
    """A parsed semantic version.

    Empty ``pre_release`` and ``build_metadata`` tuples mean the section is
    absent from the version string.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    major: pydantic.NonNegativeInt
    minor: pydantic.NonNegativeInt
    patch: pydantic.NonNegativeInt
    pre_release: tuple[str, ...] = ()
    build_metadata: tuple[str, ...] = ()

    @pydantic.field_validator('pre_release', 'build_metadata')
    @classmethod
    def _validate_identifiers(
        cls, value: tuple[str, ...], info: pydantic.ValidationInfo
    ) -> tuple[str, ...]:
        for identifier in value:
            if not IDENTIFIER_PATTERN.fullmatch(identifier):
                raise ValueError(
                    f'{identifier!r} is not a valid identifier'
                )
            if (
                info.field_name == 'pre_release'
                and NUMERIC_PATTERN.fullmatch(identifier)
                and len(identifier) > 1
                and identifier.startswith('0')
            ):
                raise ValueError(
                    f'numeric identifier {identifier!r} has a leading zero'
                )
        return value

    def to_semver(self) -> semver.Version:
        """Return the equivalent ``semver.Version``."""
        return semver.Version(
            self.major,
            self.minor,
            self.patch,
            prerelease='.'.join(self.pre_release) or None,
            build='.'.join(self.build_metadata) or None,
        )

    def compare(self, other: 'SemanticVersion') -> int:
        """Compare by SemVer precedence, returning -1, 0 or 1."""
        return self.to_semver().compare(other.to_semver())

    @property
    def precedence_key(self) -> tuple[int, int, int, tuple[str, ...]]:
        return self.major, self.minor, self.patch, self.pre_release

    def __str__(self) -> str:
        return str(self.to_semver())

    def __hash__(self) -> int:
        return hash(self.precedence_key)

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key == other.precedence_key

    def __lt__(self, other: 'SemanticVersion') -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: 'SemanticVersion') -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: 'SemanticVersion') -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: 'SemanticVersion') -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) >= 0
