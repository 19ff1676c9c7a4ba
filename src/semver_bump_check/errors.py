"""Exception hierarchy for version bump checking.

Every failure raised by the reader, extractor and parser derives from
SemverBumpCheckError so the CLI can map each kind to its own exit status.
Comparison outcomes (unchanged, downgrade) are verdicts, not exceptions.
"""

import typing

if typing.TYPE_CHECKING:
    from semver_bump_check import models


class SemverBumpCheckError(Exception):
    """Base class for all semver-bump-check errors."""


class RepositoryError(SemverBumpCheckError):
    """The git repository or its history could not be read."""


class VersionFileNotFound(SemverBumpCheckError):  # noqa: N818
    """The version file does not exist at the requested revision."""

    def __init__(
        self, path: str, selector: 'models.RevisionSelector'
    ) -> None:
        super().__init__(f'{path} does not exist at revision {selector}')
        self.path = path
        self.selector = selector


class ExtractionError(SemverBumpCheckError):
    """The version string could not be extracted from the file content."""


class MalformedJson(ExtractionError):  # noqa: N818
    """The file content is not valid JSON."""


class UndecodableContent(ExtractionError):  # noqa: N818
    """The file content is not valid UTF-8 text."""


class EmptyContent(ExtractionError):  # noqa: N818
    """The plain version file is empty or only contains whitespace."""


class KeyNotFound(ExtractionError):  # noqa: N818
    """A segment of the JSON key path is absent."""

    def __init__(self, path: typing.Sequence[str]) -> None:
        self.path = tuple(path)
        super().__init__(f'Key {".".join(self.path)!r} not found')


class WrongType(ExtractionError):  # noqa: N818
    """A JSON value on the key path has an unexpected type.

    Raised when an intermediate value is not an object or when the
    terminal value is not a string.
    """

    def __init__(
        self, path: typing.Sequence[str], expected: str, found: str
    ) -> None:
        self.path = tuple(path)
        self.expected = expected
        self.found = found
        location = '.'.join(self.path) or '<document root>'
        super().__init__(
            f'Expected {expected} at {location!r}, found {found}'
        )


class InvalidSemver(SemverBumpCheckError):  # noqa: N818
    """A string does not adhere to Semantic Versioning 2.0.0.

    :ivar value: The rejected version string
    :ivar component: The version component that failed validation
    :ivar reason: Human readable description of the failure
    """

    def __init__(self, value: str, component: str, reason: str) -> None:
        super().__init__(f'Invalid semantic version {value!r}: {reason}')
        self.value = value
        self.component = component
        self.reason = reason
