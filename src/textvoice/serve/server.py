"""Helper to launch the textvoice FastAPI app under uvicorn."""
from __future__ import annotations
import subprocess
import sys

from textvoice.common.config import get_settings

def main() -> None:
    settings = get_settings()
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "textvoice.serve.fastapi_app:app",
        "--host", settings.host,
        "--port", str(settings.port),
        "--log-level", settings.log_level.lower(),
    ]
    subprocess.run(cmd, check=True)

if __name__ == "__main__":
    main()
