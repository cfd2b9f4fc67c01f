"""Fallback queries over inconsistently named collections."""

from jobboard_core.sources.candidates import ENTITY_SET_KINDS, default_chains
from jobboard_core.sources.fallback import SourceFallbackQuery, resolve_placeholders

__all__ = ["ENTITY_SET_KINDS", "SourceFallbackQuery", "default_chains", "resolve_placeholders"]
