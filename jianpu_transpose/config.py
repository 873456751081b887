"""Tunable constants for jianpu-transpose.

Values are read from ``JIANPU_``-prefixed environment variables (or a
``.env`` file) and can be overridden per call through keyword arguments.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JIANPU_", env_file=".env", extra="ignore")

    DEFAULT_ORIGINAL_KEY: str = "C"

    # Annotation colors
    DEFAULT_CHORD_COLOR: str = "#2563EB"
    LIGHTEN_FACTOR: float = 0.4

    # Recognizer coordinates are per-mille of the image dimensions
    COORDINATE_RANGE: float = 1000.0
    PERMILLE_DIVISOR: float = 10.0

    # Observation cleanup
    DEDUP_DISTANCE_RATIO: float = 0.01  # fraction of the larger image side
    OUTLIER_SIGMA: float = 3.0
    OUTLIER_MIN_OBSERVATIONS: int = 5
    ROW_BAND: float = 30.0  # recognizer units


settings = Settings()
