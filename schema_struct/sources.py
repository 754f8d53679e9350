"""
Schema sources: load a schema document from an inline literal, a file or a URL.

Remote schemas are fetched once, synchronously, with no retry and no cache.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from .pipeline.errors import FetchError, SchemaError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def is_inline(source: str) -> bool:
    return source.lstrip().startswith("{")


def fetch_schema_text(url: str) -> str:
    """
    Download a schema document.

    Raises:
        FetchError: On network errors or non-2xx responses
    """
    logger.info("Fetching schema from %s", url)
    try:
        response = requests.get(url, timeout=FETCH_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"cannot fetch schema: {e}", url) from e
    return response.text


def read_schema_text(path: str | Path) -> str:
    """
    Read a schema document from disk.

    Raises:
        FetchError: If the file cannot be read
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise FetchError(f"cannot read schema file: {e}", str(path)) from e


def parse_schema_text(text: str, origin: str) -> dict[str, Any]:
    """
    Parse JSON text into a schema document.

    Raises:
        FetchError: If the text is not valid JSON
        SchemaError: If the document is not a JSON object
    """
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as e:
        raise FetchError(f"invalid JSON: {e}", origin) from e
    if not isinstance(schema, dict):
        raise SchemaError(f"schema document must be a JSON object, got {type(schema).__name__}", "#")
    return schema


def load_schema(source: str | Path) -> dict[str, Any]:
    """
    Load a schema from an inline JSON literal, an http(s) URL or a file path.

    Args:
        source: The schema source

    Returns:
        The parsed schema document
    """
    if isinstance(source, Path):
        return parse_schema_text(read_schema_text(source), str(source))
    if is_inline(source):
        return parse_schema_text(source, "<inline>")
    if is_url(source):
        return parse_schema_text(fetch_schema_text(source), source)
    return parse_schema_text(read_schema_text(source), source)
