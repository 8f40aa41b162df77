import asyncio

from deep_search.storage.report_writer import save_report


def test_save_report_creates_folders(tmp_path):
    target = tmp_path / "reports" / "asyncio.md"
    written = asyncio.run(save_report("# Deep Search Results", target))
    assert written == target
    assert target.read_text(encoding="utf-8") == "# Deep Search Results\n"


def test_save_report_keeps_trailing_newline(tmp_path):
    target = tmp_path / "r.md"
    asyncio.run(save_report("done\n", target))
    assert target.read_text(encoding="utf-8") == "done\n"
