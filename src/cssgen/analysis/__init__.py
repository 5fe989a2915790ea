"""Lineage analysis and property categorisation."""

from cssgen.analysis.categories import PropertyCategory, categorize_properties
from cssgen.analysis.lineage import (
    AnalysisResult,
    analyze,
    detect_bem,
    diff_properties,
    merge_records,
    to_identifier,
)

__all__ = [
    "AnalysisResult",
    "PropertyCategory",
    "analyze",
    "categorize_properties",
    "detect_bem",
    "diff_properties",
    "merge_records",
    "to_identifier",
]
