"""Conversion of recognizer observations to image-percentage positions.

The vision model reports label centers in per-mille of the image, with
occasional junk: non-numeric values, duplicate detections of the same
label and stray hits far outside the staff area. Observations are
cleaned in this order:

1. validity filter (numeric and inside the declared range),
2. vertical outlier filter,
3. same-text proximity deduplication,
4. reading-order sort,

and then mapped to percentages, either directly or through the user's
anchor pair.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from numbers import Real

import numpy as np

from jianpu_transpose.config import settings
from jianpu_transpose.coordinates.models import AnchorPair, Observation, ResolvedPosition

_LOG = logging.getLogger(__name__)


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def is_valid_observation(observation: Observation, coordinate_range: float | None = None) -> bool:
    """Check that both coordinates are finite numbers inside the range.

    Examples
    --------
    >>> is_valid_observation(Observation("C", 100, 500))
    True
    >>> is_valid_observation(Observation("C", "100", 500))
    False
    >>> is_valid_observation(Observation("C", 100, 1500))
    False
    """
    limit = settings.COORDINATE_RANGE if coordinate_range is None else coordinate_range
    return all(
        _is_number(value) and 0 <= value <= limit for value in (observation.cx, observation.cy)
    )


def filter_valid(
    observations: Iterable[Observation], coordinate_range: float | None = None
) -> list[Observation]:
    """Drop observations with unusable coordinates."""
    return [obs for obs in observations if is_valid_observation(obs, coordinate_range)]


def remove_outliers(
    observations: Sequence[Observation],
    sigma: float | None = None,
    min_observations: int | None = None,
) -> list[Observation]:
    """Drop observations whose y lies far from the median row.

    Parameters
    ----------
    observations : Sequence[Observation]
        Valid observations.
    sigma : float | None
        Allowed deviation from the median, in standard deviations.
    min_observations : int | None
        The filter only runs when there are more observations than this.

    Returns
    -------
    list[Observation]
        Observations within ``sigma`` standard deviations of the median y.
    """
    sigma = settings.OUTLIER_SIGMA if sigma is None else sigma
    min_observations = settings.OUTLIER_MIN_OBSERVATIONS if min_observations is None else min_observations

    if len(observations) <= min_observations:
        return list(observations)

    ys = np.array([obs.cy for obs in observations], dtype=np.float64)
    median = float(np.median(ys))
    limit = sigma * float(np.std(ys))

    kept = []
    for obs, y in zip(observations, ys, strict=True):
        if abs(y - median) > limit:
            _LOG.debug("Dropping outlier %r at y=%s (median %.1f)", obs.text, obs.cy, median)
            continue
        kept.append(obs)
    return kept


def _normalize_text(text: str) -> str:
    return "".join(text.split()).lower()


def deduplicate(
    observations: Iterable[Observation],
    image_width: float,
    image_height: float,
    distance_ratio: float | None = None,
    coordinate_range: float | None = None,
) -> list[Observation]:
    """Remove repeated detections of the same label.

    Two observations are duplicates only when their normalized text is
    equal and they lie closer than ``distance_ratio`` times the larger
    image dimension. Recognizer offsets are scaled to pixels on each axis
    before measuring. The first occurrence is kept.

    Examples
    --------
    >>> obs = [Observation("C", 100, 500), Observation("C", 102, 501)]
    >>> len(deduplicate(obs, 1000, 1000))
    1
    >>> obs = [Observation("C", 100, 500), Observation("G", 100, 500)]
    >>> len(deduplicate(obs, 1000, 1000))
    2
    """
    ratio = settings.DEDUP_DISTANCE_RATIO if distance_ratio is None else distance_ratio
    limit = settings.COORDINATE_RANGE if coordinate_range is None else coordinate_range
    threshold = ratio * max(image_width, image_height)
    scale_x = image_width / limit
    scale_y = image_height / limit

    kept: list[Observation] = []
    for obs in observations:
        text = _normalize_text(obs.text)
        duplicate = next(
            (
                existing
                for existing in kept
                if _normalize_text(existing.text) == text
                and np.hypot((obs.cx - existing.cx) * scale_x, (obs.cy - existing.cy) * scale_y) < threshold
            ),
            None,
        )
        if duplicate is not None:
            _LOG.debug("Skipping duplicate %r at (%s, %s)", obs.text, obs.cx, obs.cy)
            continue
        kept.append(obs)
    return kept


def sort_reading_order(
    observations: Iterable[Observation], row_band: float | None = None
) -> list[Observation]:
    """Sort observations top-to-bottom, then left-to-right within a row.

    A row starts at its topmost observation and takes every following
    observation less than ``row_band`` units below it.

    Examples
    --------
    >>> obs = [Observation("G", 300, 110), Observation("C", 100, 120), Observation("F", 50, 400)]
    >>> [o.text for o in sort_reading_order(obs)]
    ['C', 'G', 'F']
    """
    band = settings.ROW_BAND if row_band is None else row_band

    rows: list[list[Observation]] = []
    for obs in sorted(observations, key=lambda o: (o.cy, o.cx)):
        if rows and obs.cy - rows[-1][0].cy < band:
            rows[-1].append(obs)
        else:
            rows.append([obs])

    return [obs for row in rows for obs in sorted(row, key=lambda o: o.cx)]


def map_direct(
    observations: Iterable[Observation], divisor: float | None = None
) -> list[ResolvedPosition]:
    """Map per-mille coordinates straight to percentages on both axes.

    Examples
    --------
    >>> map_direct([Observation("C", 250, 800)])
    [ResolvedPosition(text='C', x=25.0, y=80.0)]
    """
    divisor = settings.PERMILLE_DIVISOR if divisor is None else divisor
    return [ResolvedPosition(obs.text, float(obs.cx) / divisor, float(obs.cy) / divisor) for obs in observations]


def map_with_anchors(
    observations: Sequence[Observation],
    anchors: AnchorPair,
    divisor: float | None = None,
) -> list[ResolvedPosition]:
    """Map observations using the user's first/last anchor heights.

    x maps directly. y is taken as the observation's relative position
    between the lowest and highest recognized y, and re-expressed between
    the two anchor heights.

    Parameters
    ----------
    observations : Sequence[Observation]
        Cleaned observations.
    anchors : AnchorPair
        User-confirmed first and last chord positions, in percent.
    divisor : float | None
        Recognizer units per percent.

    Returns
    -------
    list[ResolvedPosition]
        One position per observation, in the same order.

    Examples
    --------
    >>> from jianpu_transpose.coordinates.models import AnchorPoint
    >>> pair = AnchorPair(AnchorPoint(10, 20), AnchorPoint(90, 80))
    >>> [p.y for p in map_with_anchors([Observation("C", 100, 100), Observation("G", 900, 300)], pair)]
    [20.0, 80.0]
    """
    divisor = settings.PERMILLE_DIVISOR if divisor is None else divisor
    if not observations:
        return []

    ys = np.array([obs.cy for obs in observations], dtype=np.float64)
    min_y = float(ys.min())
    span = float(ys.max()) - min_y or 1.0

    first_y = anchors.first.y
    anchor_span = anchors.last.y - first_y

    return [
        ResolvedPosition(
            obs.text,
            float(obs.cx) / divisor,
            first_y + (float(y) - min_y) / span * anchor_span,
        )
        for obs, y in zip(observations, ys, strict=True)
    ]


def clean_observations(
    observations: Iterable[Observation],
    image_width: float,
    image_height: float,
) -> list[Observation]:
    """Run validity, outlier, dedup and reading-order steps."""
    valid = filter_valid(observations)
    inliers = remove_outliers(valid)
    unique = deduplicate(inliers, image_width, image_height)
    _LOG.debug(
        "Observations: %d valid, %d after outlier filter, %d after dedup",
        len(valid),
        len(inliers),
        len(unique),
    )
    return sort_reading_order(unique)


def resolve_positions(
    observations: Iterable[Observation],
    image_width: float,
    image_height: float,
    anchors: AnchorPair | None = None,
) -> list[ResolvedPosition]:
    """Turn raw observations into ordered percentage positions.

    Parameters
    ----------
    observations : Iterable[Observation]
        Raw recognizer observations.
    image_width : float
        Image width, in the unit used for the dedup threshold.
    image_height : float
        Image height.
    anchors : AnchorPair | None
        Optional user anchors; selects anchor-calibrated mapping.

    Returns
    -------
    list[ResolvedPosition]
        One position per retained observation, in reading order.
    """
    cleaned = clean_observations(observations, image_width, image_height)
    if anchors is None:
        return map_direct(cleaned)
    return map_with_anchors(cleaned, anchors)
