"""Launch the Streamlit UI and open it in the browser."""

from __future__ import annotations

import logging
import threading
import time
import webbrowser
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

PORT = 8501
URL = f"http://localhost:{PORT}"


def wait_and_open_browser(url: str = URL, attempts: int = 30, delay: float = 1.0) -> bool:
    """Poll *url* until it answers 200, then open it in the browser.

    Returns False if the server never came up.
    """
    for _ in range(attempts):
        try:
            resp = requests.get(url, timeout=2)
            if resp.status_code == 200:
                webbrowser.open(url)
                return True
        except requests.RequestException:
            pass
        time.sleep(delay)
    logger.warning("Server at %s did not respond after %d attempts", url, attempts)
    return False


def main() -> None:
    from streamlit.web import bootstrap

    app_path = str(Path(__file__).resolve().parent / "app.py")

    # Open browser in a background thread once the server is up
    threading.Thread(target=wait_and_open_browser, daemon=True).start()

    bootstrap.run(
        app_path,
        is_hello=False,
        args=[],
        flag_options={
            "server.headless": True,
            "server.port": PORT,
            "browser.gatherUsageStats": False,
        },
    )


if __name__ == "__main__":
    main()
