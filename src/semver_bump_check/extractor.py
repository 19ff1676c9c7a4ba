"""Extraction of the version string from raw file content."""

import json
import logging
import typing

from semver_bump_check import errors, models

LOGGER = logging.getLogger(__name__)

JSON_TYPE_NAMES = {
    dict: 'object',
    list: 'array',
    str: 'string',
    int: 'number',
    float: 'number',
    bool: 'boolean',
    type(None): 'null',
}


def extract(
    content: models.RawFileContent | bytes | str,
    mode: models.ExtractionMode,
) -> str:
    """Return the candidate version string found in ``content``.

    Args:
        content: File content, either raw or as read from a revision
        mode: How to locate the version inside the content

    Raises:
        errors.ExtractionError: If the version can not be located

    """
    if isinstance(content, models.RawFileContent):
        LOGGER.debug(
            'Extracting version from %s at %s using %s mode',
            content.path,
            content.selector,
            mode.kind,
        )
        content = content.content

    match mode:
        case models.JsonExtraction():
            return _extract_json(content, mode.key_path)
        case models.PlainExtraction():
            return _extract_plain(content)
        case _:
            raise RuntimeError(f'Unsupported extraction mode: {mode!r}')


def _extract_plain(content: bytes | str) -> str:
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError as exc:
            raise errors.UndecodableContent(
                f'Version file is not valid UTF-8: {exc}'
            ) from exc
    value = content.strip()
    if not value:
        raise errors.EmptyContent('Version file is empty')
    return value


def _extract_json(content: bytes | str, key_path: tuple[str, ...]) -> str:
    try:
        node: typing.Any = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise errors.MalformedJson(f'Invalid JSON: {exc}') from exc

    for offset, segment in enumerate(key_path):
        if not isinstance(node, dict):
            raise errors.WrongType(
                key_path[:offset], 'object', _type_name(node)
            )
        if segment not in node:
            raise errors.KeyNotFound(key_path[: offset + 1])
        node = node[segment]

    if not isinstance(node, str):
        raise errors.WrongType(key_path, 'string', _type_name(node))
    return node


def _type_name(value: typing.Any) -> str:
    return JSON_TYPE_NAMES.get(type(value), type(value).__name__)
