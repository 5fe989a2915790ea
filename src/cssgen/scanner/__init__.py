"""Reference scanning: pattern matchers, file scanning and discovery."""

from cssgen.scanner.discovery import discover_files
from cssgen.scanner.matchers import PrecedenceTable, build_matchers
from cssgen.scanner.scan import ScanResult, scan_file, scan_files, scan_text

__all__ = [
    "PrecedenceTable",
    "ScanResult",
    "build_matchers",
    "discover_files",
    "scan_file",
    "scan_files",
    "scan_text",
]
