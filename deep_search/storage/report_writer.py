# storage/report_writer.py
import aiofiles
from pathlib import Path

from utils.logger import setup_logger

logger = setup_logger(__name__)


async def save_report(text: str, path) -> Path:
    """Write a report to disk, creating parent folders as needed."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(str(out_path), "w", encoding="utf-8") as f:
        await f.write(text)
        if not text.endswith("\n"):
            await f.write("\n")
    logger.info(f"✅ Saved report: {out_path}")
    return out_path
