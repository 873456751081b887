"""Decoding of the vision model's JSON reply."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from jianpu_transpose.coordinates.models import Observation, RecognitionResult

# Models sometimes wrap the JSON in a Markdown code fence
CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


class RecognitionError(ValueError):
    """Raised when the recognizer reply cannot be decoded."""


def recognition_from_dict(data: Mapping[str, Any]) -> RecognitionResult:
    """Build a RecognitionResult from decoded JSON.

    Entries of ``centers`` that are not objects are ignored; coordinate
    values are passed through untouched.

    Parameters
    ----------
    data : Mapping[str, Any]
        Object with an optional ``key`` and a ``centers`` list of
        ``{"text", "cx", "cy"}`` objects.

    Returns
    -------
    RecognitionResult
        The decoded result. A missing ``centers`` list yields no observations.

    Raises
    ------
    RecognitionError
        If ``data`` is not an object or ``centers`` is not a list.
    """
    if not isinstance(data, Mapping):
        msg = f"Recognition result must be an object, got {type(data).__name__}"
        raise RecognitionError(msg)

    centers = data.get("centers") or []
    if not isinstance(centers, list):
        msg = "Recognition result 'centers' must be a list"
        raise RecognitionError(msg)

    key = data.get("key")
    observations = tuple(
        Observation(text=str(entry.get("text", "")), cx=entry.get("cx"), cy=entry.get("cy"))
        for entry in centers
        if isinstance(entry, Mapping)
    )
    return RecognitionResult(key=key if isinstance(key, str) and key else None, centers=observations)


def parse_recognition_response(text: str) -> RecognitionResult:
    """Decode the raw text reply of the vision model.

    Parameters
    ----------
    text : str
        Model output: bare JSON, or JSON inside a Markdown code fence.

    Returns
    -------
    RecognitionResult
        The decoded result.

    Raises
    ------
    RecognitionError
        If no valid JSON object can be decoded.

    Examples
    --------
    >>> result = parse_recognition_response('```json\\n{"key": "1=D", "centers": []}\\n```')
    >>> result.key
    '1=D'
    """
    content = text.strip()
    match = CODE_FENCE_RE.search(content)
    if match:
        content = match.group(1)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        msg = f"Recognition reply is not valid JSON: {e}"
        raise RecognitionError(msg) from e

    return recognition_from_dict(data)
