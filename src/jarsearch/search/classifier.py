"""
File classification for jarsearch.

Single source of truth for mapping extensions to categories. The walker uses
``classify_path`` to bucket files on disk, the container scanner uses
``classify_entry`` to bucket entries for statistics, and both scanners use the
label helpers to tag matches.
"""

from __future__ import annotations

import posixpath
from pathlib import Path

from ..core.types import EntryKind, FileCategory

CLASS_SUFFIX = ".class"

# File extension to category mapping (lowercased, with dot)
EXTENSION_MAP: dict[str, FileCategory] = {
    # Containers
    ".jar": FileCategory.ARCHIVE_JAR,
    ".zip": FileCategory.ARCHIVE_ZIP_FAMILY,
    ".war": FileCategory.ARCHIVE_ZIP_FAMILY,
    ".ear": FileCategory.ARCHIVE_ZIP_FAMILY,
    # JVM sources
    ".java": FileCategory.SOURCE,
    ".kt": FileCategory.SOURCE,
    ".kts": FileCategory.SOURCE,
    ".scala": FileCategory.SOURCE,
    ".groovy": FileCategory.SOURCE,
    # Configuration
    ".properties": FileCategory.CONFIG,
    ".conf": FileCategory.CONFIG,
    ".config": FileCategory.CONFIG,
    ".cfg": FileCategory.CONFIG,
    ".ini": FileCategory.CONFIG,
    # Scripts
    ".bat": FileCategory.SCRIPT,
    ".cmd": FileCategory.SCRIPT,
    ".sh": FileCategory.SCRIPT,
    ".ps1": FileCategory.SCRIPT,
    ".py": FileCategory.SCRIPT,
    ".rb": FileCategory.SCRIPT,
    # Markup
    ".xml": FileCategory.MARKUP,
    ".xsd": FileCategory.MARKUP,
    ".xsl": FileCategory.MARKUP,
    ".xslt": FileCategory.MARKUP,
    # Text and data
    ".txt": FileCategory.TEXT,
    ".md": FileCategory.TEXT,
    ".log": FileCategory.TEXT,
    ".yaml": FileCategory.TEXT,
    ".yml": FileCategory.TEXT,
    ".json": FileCategory.TEXT,
}

# Match category labels for loose files
FILE_TYPE_LABELS: dict[str, str] = {
    ".properties": "properties_config",
    ".conf": "configuration",
    ".config": "configuration",
    ".cfg": "configuration",
    ".bat": "batch_script",
    ".cmd": "batch_script",
    ".sh": "shell_script",
    ".xml": "xml_document",
    ".xsd": "xml_document",
    ".xsl": "xml_document",
    ".xslt": "xml_document",
    ".json": "json_data",
    ".yaml": "yaml_data",
    ".yml": "yaml_data",
    ".ini": "ini_config",
    ".log": "log_file",
    ".txt": "text_file",
    ".md": "markdown",
    ".py": "python_script",
    ".rb": "ruby_script",
    ".ps1": "powershell_script",
}

CLASS_BYTECODE_LABEL = "class_bytecode"
BINARY_LABEL_SUFFIX = "_binary"


def _extension(path: Path) -> str:
    return path.suffix.lower()


def classify_path(path: Path) -> FileCategory:
    """Return the category of a file on disk. Total: unknown extensions are OTHER."""
    return EXTENSION_MAP.get(_extension(path), FileCategory.OTHER)


def entry_extension(name: str) -> str:
    """Extension of a container entry name, with dot, original case."""
    return posixpath.splitext(posixpath.basename(name))[1]


def is_class_entry(name: str) -> bool:
    return name.endswith(CLASS_SUFFIX)


def is_directory_entry(name: str) -> bool:
    return name.endswith("/")


def classify_entry(name: str) -> EntryKind:
    """Statistics bucket of a container entry."""
    if is_class_entry(name):
        return EntryKind.CLASS
    if EXTENSION_MAP.get(entry_extension(name).lower()) is FileCategory.SOURCE:
        return EntryKind.SOURCE
    return EntryKind.OTHER


def file_type_label(path: Path) -> str:
    """Match category for a loose file, e.g. ``properties_config`` or ``no_extension``."""
    ext = _extension(path)
    if not ext:
        return "no_extension"
    return FILE_TYPE_LABELS.get(ext, ext[1:])


def binary_label(path: Path) -> str:
    return file_type_label(path) + BINARY_LABEL_SUFFIX


def entry_type_label(name: str) -> str:
    """Match category for a text entry inside a container: its own extension."""
    ext = entry_extension(name)
    return ext[1:] if ext else "unknown"
