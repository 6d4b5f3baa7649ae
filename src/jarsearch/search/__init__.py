"""
Search building blocks.

- classifier: file and entry categories, type labels
- walker: directory traversal with exclusion and size filtering
- container: zip-format container scanning
- matchers: class-name and package matching
- extractors: printable-string extraction from binary data
- text_scanner: line-oriented text search with binary fallback
"""

from .classifier import classify_entry, classify_path, file_type_label
from .container import ContainerScanner
from .extractors import iter_printable_runs, search_binary
from .matchers import dotted_class_name, matches_exact, matches_package, matches_substring, package_prefix
from .text_scanner import scan_loose_file, scan_text
from .walker import ClassifiedFile, ExclusionFilter, iter_classified_files, passes_size_threshold

__all__ = [
    "ClassifiedFile",
    "ContainerScanner",
    "ExclusionFilter",
    "classify_entry",
    "classify_path",
    "dotted_class_name",
    "file_type_label",
    "iter_classified_files",
    "iter_printable_runs",
    "matches_exact",
    "matches_package",
    "matches_substring",
    "package_prefix",
    "passes_size_threshold",
    "scan_loose_file",
    "scan_text",
    "search_binary",
]
