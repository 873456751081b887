"""Recognizer observation cleanup and coordinate mapping."""

from jianpu_transpose.coordinates.models import (
    AnchorPair,
    AnchorPoint,
    Observation,
    RecognitionResult,
    ResolvedPosition,
)
from jianpu_transpose.coordinates.recognition import (
    RecognitionError,
    parse_recognition_response,
    recognition_from_dict,
)
from jianpu_transpose.coordinates.resolver import (
    clean_observations,
    deduplicate,
    filter_valid,
    is_valid_observation,
    map_direct,
    map_with_anchors,
    remove_outliers,
    resolve_positions,
    sort_reading_order,
)

__all__ = [
    "AnchorPair",
    "AnchorPoint",
    "Observation",
    "RecognitionError",
    "RecognitionResult",
    "ResolvedPosition",
    "clean_observations",
    "deduplicate",
    "filter_valid",
    "is_valid_observation",
    "map_direct",
    "map_with_anchors",
    "parse_recognition_response",
    "recognition_from_dict",
    "remove_outliers",
    "resolve_positions",
    "sort_reading_order",
]
