"""Match package for card-name validation."""

from .similarity import best_name_match, calculate_name_similarity, normalize_name

__all__ = ["calculate_name_similarity", "best_name_match", "normalize_name"]
