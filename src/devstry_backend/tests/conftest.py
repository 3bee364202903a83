"""Shared test fixtures for Devstry backend tests."""

import logging
import logging.handlers
import shutil
import tempfile
from pathlib import Path

import pytest
from rich.logging import RichHandler


SAMPLE_DEVLOG = """# Devlog 2025-08-18

## /src/app.js
**Global constants** | **Lines 31-53** | **2 changes tracked**

**Explanation**
Response handling for the status endpoint.

##### 2025-08-18T20:32:01.435Z
| Line | Before | After |
|------|--------|-------|
| 32 | `});` | `});` |
| 🟡34 | `});` | `res.send(x)` |

**AI Insight**
Sends the response **before** the handler returns.

**Suggestions**
- Add a test for the empty body case
- Return early on error

## /src/util.js
**Helpers** | **Lines 5** | **1 change tracked**

##### 2025-08-18T21:00:00.000Z
| Line | Before | After |
|------|--------|-------|
| 🔴5 | `var x = 1;` | `const x = 1;` |
"""


@pytest.fixture
def temp_directory():
    """Provide a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    temp_path = Path(temp_dir)

    yield temp_path

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def sample_devlog() -> str:
    """A devlog with two tracked files, one scope each."""
    return SAMPLE_DEVLOG


@pytest.fixture
def devlog_workspace(temp_directory, sample_devlog, monkeypatch):
    """
    A workspace containing ``devLog/2025-08-18.md`` with the sample devlog.

    The working directory is switched to the workspace and ``DEVSTRY_*``
    variables are cleared so configuration comes from defaults only.
    """
    for name in (
        "DEVSTRY_DEVLOG_DIR",
        "DEVSTRY_HASH_ALGORITHM",
        "DEVSTRY_CACHE_SIZE",
        "DEVSTRY_LOG_LEVEL",
        "DEVSTRY_LOG_FORMAT",
        "DEVSTRY_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)

    devlog_dir = temp_directory / "devLog"
    devlog_dir.mkdir()
    (devlog_dir / "2025-08-18.md").write_text(sample_devlog, encoding="utf-8")

    monkeypatch.chdir(temp_directory)
    return temp_directory


@pytest.fixture
def restore_root_logger():
    """Remove handlers installed by LoggingManager and restore the root level."""
    root = logging.getLogger()
    level = root.level

    yield root

    for handler in root.handlers[:]:
        if type(handler) in (RichHandler, logging.FileHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
