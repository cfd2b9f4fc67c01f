"""Raw record normalization into canonical entities."""

from jobboard_core.normalize.normalizer import RecordNormalizer, normalize

__all__ = ["RecordNormalizer", "normalize"]
