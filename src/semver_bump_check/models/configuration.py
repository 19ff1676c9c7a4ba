"""Configuration models with Pydantic validation.

Defines the extraction modes, the accept/reject policy and the root
configuration assembled from command line arguments for a single run.
"""

import pathlib
import re
import typing

import pydantic

KEY_PATH_DELIMITERS = re.compile(r'[./]')


class JsonExtraction(pydantic.BaseModel):
    """Read the version from a string value inside a JSON document.

    The key path may be given as a sequence of segments or as a single
    dot- or slash-delimited string such as ``package.version`` or
    ``/package/version``.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    kind: typing.Literal['json'] = 'json'
    key_path: tuple[str, ...]

    @pydantic.field_validator('key_path', mode='before')
    @classmethod
    def _split_key_path(cls, value: typing.Any) -> typing.Any:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped[:1] == '/':
                stripped = stripped[1:]
            return tuple(KEY_PATH_DELIMITERS.split(stripped))
        return value

    @pydantic.field_validator('key_path')
    @classmethod
    def _validate_segments(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value or not all(value):
            raise ValueError('key path must not contain empty segments')
        return value

    def __str__(self) -> str:
        return '.'.join(self.key_path)


class PlainExtraction(pydantic.BaseModel):
    """Treat the entire trimmed file content as the version string."""

    model_config = pydantic.ConfigDict(frozen=True)

    kind: typing.Literal['plain'] = 'plain'


ExtractionMode = typing.Annotated[
    JsonExtraction | PlainExtraction, pydantic.Field(discriminator='kind')
]


class Policy(pydantic.BaseModel):
    """Accept/reject rules applied to a comparison verdict.

    ``allow_initial`` accepts a version file that does not exist in the
    previous commit. ``accept_pre_release`` accepts bumps where only the
    pre-release part changed, such as ``1.0.0-rc.1`` to ``1.0.0``.
    """

    allow_initial: bool = True
    accept_pre_release: bool = True


class Configuration(pydantic.BaseModel):
    """Settings for a single version bump check."""

    file: pathlib.Path
    mode: ExtractionMode = pydantic.Field(default_factory=PlainExtraction)
    repository: pathlib.Path = pathlib.Path('.')
    policy: Policy = pydantic.Field(default_factory=Policy)
    verbose: bool = False
