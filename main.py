"""
main.py: Dashboard launcher and entry point.

Run this file to start the pricing helper dashboard and open it in a browser:

    python main.py

The prediction service itself is external; point the dashboard at it with
PRICING_API_BASE_URL (default http://localhost:8000) or edit the URL in the
sidebar.

Direct streamlit usage:
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from pricing_helper.utils.config import get_settings


DASHBOARD_SCRIPT = Path(__file__).resolve().parent / "dashboard" / "app.py"


def main() -> int:
    """Start the Streamlit dashboard; blocks until CTRL+C."""
    settings = get_settings()
    dashboard_url = f"http://{settings.dashboard_host}:{settings.dashboard_port}"

    print("=" * 60)
    print(f"  {settings.app_name}")
    print("=" * 60)
    print(f"  Dashboard         : {dashboard_url}")
    print(f"  Prediction service: {settings.api_base_url}")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    command = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(DASHBOARD_SCRIPT),
        "--server.address",
        settings.dashboard_host,
        "--server.port",
        str(settings.dashboard_port),
    ]
    try:
        return subprocess.call(command)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
