"""
Shared test fixtures and utilities for jarsearch tests.

Archive fixtures are built on the fly with ``zipfile`` so every test gets a
fresh, known tree of JAR, WAR and loose files.
"""

import zipfile
from pathlib import Path

import pytest

from jarsearch.utils.logging_config import LogLevel, configure_logging

# Class file payloads: magic number, then constant-pool-like bytes
BAR_CLASS = b"\xca\xfe\xba\xbe\x00\x00\x004\x00\x10jdbc:oracle:thin\x00\x01ABCD\x00"
FOOBAR_CLASS = b"\xca\xfe\xba\xbe\x00\x00\x004\x00\x06FooBar\x00"
PLAIN_CLASS = b"\xca\xfe\xba\xbe\x00\x00\x004\x00\x01"

APP_PROPERTIES = "db.url=jdbc:oracle:thin:@host:1521\ndb.user=app\n"
MANIFEST = "Manifest-Version: 1.0\r\nCreated-By: test\r\n"

DB_PROPERTIES = "url=jdbc:oracle:thin:@db\nbackup.url=jdbc:oracle:thin:@db2\nuser=app\n"
MAIN_JAVA = 'public class Main {\n    String url = "jdbc:oracle:thin";\n}\n'
RUN_SH = "#!/bin/sh\necho start\n"
README = "Connect with a jdbc:oracle URL\n"
WEB_XML = "<web-app>\n  <url>jdbc:oracle:thin</url>\n</web-app>\n"


def make_zip(path: Path, entries: dict[str, bytes | str]) -> Path:
    """Write a zip-format container with the given entries, in order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return path


def write_file(path: Path, content: bytes | str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


APP_JAR_ENTRIES: dict[str, bytes | str] = {
    "META-INF/": b"",
    "META-INF/MANIFEST.MF": MANIFEST,
    "com/": b"",
    "com/foo/": b"",
    "com/foo/Bar.class": BAR_CLASS,
    "com/foo/FooBar.class": FOOBAR_CLASS,
    "com/foo/sub/Deep.class": PLAIN_CLASS,
    "com/foobar/X.class": PLAIN_CLASS,
    "config/app.properties": APP_PROPERTIES,
    "src/com/foo/Bar.java": "package com.foo;\nclass Bar {}\n",
}

OTHER_JAR_ENTRIES: dict[str, bytes | str] = {
    "Bar.class": PLAIN_CLASS,
    "org/x/Util.class": PLAIN_CLASS,
}

WAR_ENTRIES: dict[str, bytes | str] = {
    "WEB-INF/web.xml": WEB_XML,
    "WEB-INF/classes/com/foo/Bar.class": BAR_CLASS,
}


@pytest.fixture(autouse=True)
def quiet_logging():
    """Reset the global logger so tests never inherit a previous test's setup."""
    configure_logging(level=LogLevel.WARNING, enable_console=False)
    yield


@pytest.fixture
def app_jar(tmp_path):
    return make_zip(tmp_path / "app.jar", APP_JAR_ENTRIES)


@pytest.fixture
def sample_tree(tmp_path):
    """
    A deployment-like tree::

        root/
          backup/old.jar          (copy of app.jar)
          conf/db.properties      (two jdbc:oracle lines)
          dist/web.war
          lib/app.jar
          lib/other.jar
          scripts/run.sh
          src/Main.java
          README
    """
    root = tmp_path / "root"
    make_zip(root / "lib" / "app.jar", APP_JAR_ENTRIES)
    make_zip(root / "lib" / "other.jar", OTHER_JAR_ENTRIES)
    make_zip(root / "backup" / "old.jar", APP_JAR_ENTRIES)
    make_zip(root / "dist" / "web.war", WAR_ENTRIES)
    write_file(root / "conf" / "db.properties", DB_PROPERTIES)
    write_file(root / "src" / "Main.java", MAIN_JAVA)
    write_file(root / "scripts" / "run.sh", RUN_SH)
    write_file(root / "README", README)
    return root


@pytest.fixture
def broken_jar(tmp_path):
    return write_file(tmp_path / "broken.jar", b"this is not a zip archive")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: End-to-end tests over generated trees")
    config.addinivalue_line("markers", "cli: CLI-related tests")
