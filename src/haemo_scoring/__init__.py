"""Haemo Scoring: HAL and HAEMO-QoL-A scoring engine for hemophilia care."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("haemo-scoring")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
__all__ = ["__version__"]
