"""Canonical field name resolution."""

from jobboard_core.mapping.fields import FieldMapper, FieldSpec, resolve

__all__ = ["FieldMapper", "FieldSpec", "resolve"]
