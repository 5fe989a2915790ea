from cssgen.model.finding import Finding, Severity
from cssgen.model.record import ClassRecord, PropertyDiff
from cssgen.model.reference import ClassReference, SourceLocation

__all__ = [
    "ClassRecord",
    "ClassReference",
    "Finding",
    "PropertyDiff",
    "Severity",
    "SourceLocation",
]
