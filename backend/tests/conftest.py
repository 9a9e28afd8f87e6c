from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Must be set before logon_hours.config is imported by any test module.
os.environ.setdefault(
    "LOGON_HOURS_DATABASE_PATH",
    str(Path(tempfile.mkdtemp(prefix="logon-hours-")) / "test.db"),
)
