"""Candidate filtering.

This module provides the filter criteria value object, the parsers
that build it from user strings, and the selector predicate.
"""

from nuke.filter.criteria import FilterCriteria, SizeOperator
from nuke.filter.parsing import parse_duration, parse_size, parse_size_filter
from nuke.filter.selector import admits, is_hidden, matches_glob

__all__ = [
    "FilterCriteria",
    "SizeOperator",
    "admits",
    "is_hidden",
    "matches_glob",
    "parse_duration",
    "parse_size",
    "parse_size_filter",
]
