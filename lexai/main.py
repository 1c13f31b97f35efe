"""Main application entry point.

Runs the NiceGUI client (chat page and document dashboard) against the LexAI
backend configured by LEXAI_BASE_URL. Environment variables are loaded from
.env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Validates configuration, registers the pages and starts NiceGUI.
    HOST and PORT select the listening address (default 0.0.0.0:8080).
    NICEGUI_STORAGE_SECRET signs the per-browser storage holding the login.
    """
    from nicegui import ui

    from lexai.client.config import get_client_config
    from lexai.ui.chat_page import chat_page  # noqa: F401 - Registers the page
    from lexai.ui.dashboard_page import dashboard_page  # noqa: F401 - Registers the page

    config = get_client_config()
    port = int(os.getenv("PORT", "8080"))

    logger.info(f"Using LexAI backend at {config.base_url}")
    logger.info(f"Chat UI available at http://localhost:{port}/")
    logger.info(f"Dashboard available at http://localhost:{port}/dashboard")

    ui.run(
        title="LexAI Assistant",
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        reload=False,
        show=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "lexai-client-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
