"""Production startup script for the Assessment Report Service.

This script handles:
1. Installing the Chromium build Playwright needs (PDF renderer only)
2. Starting the API server with the configured host, port and workers
"""

import os
import signal
import subprocess
import sys

from api.config import get_settings


def install_browser() -> bool:
    """Install headless Chromium for PDF rendering."""
    print("Installing Chromium for PDF rendering...")
    try:
        subprocess.run(
            [sys.executable, "-m", "playwright", "install", "chromium"],
            check=True,
            capture_output=True,
            text=True,
        )
        print("Chromium ready.")
        return True
    except subprocess.CalledProcessError as e:
        print(f"Chromium install failed: {e.stderr}")
        return False


def start_api() -> None:
    """Start the FastAPI application with uvicorn."""
    settings = get_settings()
    port = os.getenv("PORT", str(settings.api_port))
    workers = str(settings.api_workers)

    print(f"Starting API server on {settings.api_host}:{port} with {workers} worker(s)...")

    os.execvp(
        "uvicorn",
        [
            "uvicorn",
            "api.main:app",
            "--host",
            settings.api_host,
            "--port",
            port,
            "--workers",
            workers,
            "--proxy-headers",
        ],
    )


def signal_handler(signum: int, _frame: object) -> None:
    """Handle shutdown signals gracefully."""
    print(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    """Main entry point."""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    install_enabled = os.getenv("INSTALL_BROWSER", "true").lower() == "true"
    if get_settings().renderer == "pdf" and install_enabled and not install_browser():
        print("Browser install failed, PDF generation will report render errors")

    start_api()


if __name__ == "__main__":
    main()
