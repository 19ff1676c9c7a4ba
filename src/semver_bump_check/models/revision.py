"""Revision selection and raw file content models."""

import enum

import pydantic


class RevisionSelector(enum.StrEnum):
    """Snapshot of the version file to read."""

    current = 'current'
    previous_commit = 'previous-commit'


class RawFileContent(pydantic.BaseModel):
    """Content of the version file at a single revision."""

    model_config = pydantic.ConfigDict(frozen=True)

    path: str
    selector: RevisionSelector
    content: bytes
