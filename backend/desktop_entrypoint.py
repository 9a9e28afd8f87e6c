from __future__ import annotations

import sys
import threading
import webbrowser
from pathlib import Path

import uvicorn


def main() -> None:
    root = Path(__file__).resolve().parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    from logon_hours.config import settings

    def open_browser() -> None:
        webbrowser.open(f"http://{settings.host}:{settings.port}/docs")

    threading.Timer(1.0, open_browser).start()
    uvicorn.run(
        "logon_hours.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
