"""
Class and package name matching for container entries.

Entry names use ``/`` separators (``com/foo/Bar.class``); class queries use
dotted names (``com.foo.Bar``).

Functions:
    dotted_class_name: ``com/foo/Bar.class`` -> ``com.foo.Bar``
    matches_exact: Exact simple or fully-qualified class name match
    matches_substring: Class name contains the query
    package_prefix: ``com.foo`` -> ``com/foo/``
    matches_package: Class entry lives in the package or one of its subpackages

Example:
    >>> matches_exact("com.foo.Bar", "Bar")
    True
    >>> matches_exact("com.fooBar", "Bar")
    False
    >>> matches_package("com/foobar/X.class", package_prefix("com.foo"))
    False
"""

from __future__ import annotations

from .classifier import CLASS_SUFFIX, is_class_entry


def dotted_class_name(entry_name: str) -> str:
    name = entry_name[: -len(CLASS_SUFFIX)] if entry_name.endswith(CLASS_SUFFIX) else entry_name
    return name.replace("/", ".")


def matches_exact(class_name: str, query: str) -> bool:
    return class_name == query or class_name.endswith("." + query)


def matches_substring(class_name: str, query: str) -> bool:
    return query in class_name


def package_prefix(package: str) -> str:
    """Slash form of a dotted package, always ending in ``/``."""
    path = package.replace(".", "/").strip("/")
    return path + "/" if path else ""


def matches_package(entry_name: str, prefix: str) -> bool:
    return is_class_entry(entry_name) and entry_name.startswith(prefix)
