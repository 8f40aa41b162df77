# runner.py

# One-shot deep search from the command line, plus the browser installer.

import subprocess
import sys
import shutil

from config import Settings
from deep_search.service import DeepSearchService
from deep_search.storage.models import ToolResult
from deep_search.storage.report_writer import save_report
from utils.logger import setup_logger

logger = setup_logger(__name__)


def install_playwright():
    """
    Installs Playwright Chromium browser if not already installed.
    """
    logger.info("Installing Playwright Chromium browser (if not installed)...")

    python_exe = sys.executable or shutil.which("python") or "python"
    logger.info(f"Using Python executable: {python_exe}")

    try:
        result = subprocess.run(
            [python_exe, "-m", "playwright", "install", "chromium"],
            check=True,
            capture_output=True,
            text=True
        )
    except subprocess.CalledProcessError as e:
        logger.error("Playwright installation failed.")
        logger.debug(f"stdout: {e.stdout}")
        logger.debug(f"stderr: {e.stderr}")
        logger.critical("Please manually run:\n  pip install playwright\n  playwright install chromium")
        raise

    logger.info("Playwright installation complete.")
    logger.debug(f"Installation output: {result.stdout}")


async def run_deep_search(settings: Settings, query: str, results=None, depth=None, output=None) -> ToolResult:
    service = DeepSearchService.from_settings(settings)
    try:
        result = await service.run_tool({"query": query, "results": results, "depth": depth})
    finally:
        await service.close()

    if output and not result.is_error:
        await save_report(result.text, output)
    return result
