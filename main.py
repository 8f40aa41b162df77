import argparse
import asyncio
import os
import signal
import sys

from config import load_settings
from deep_search.errors import ConfigError
from utils.logger import set_debug, setup_logger

logger = setup_logger("deep_search")


def _settings_or_exit():
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.critical(str(e))
        sys.exit(1)
    set_debug(settings.debug_mode)
    return settings


def cmd_search(args):
    from deep_search.runner import run_deep_search

    settings = _settings_or_exit()
    result = asyncio.run(run_deep_search(
        settings,
        " ".join(args.query),
        results=args.results,
        depth=args.depth,
        output=args.output,
    ))
    print(result.text)
    return 1 if result.is_error else 0


def cmd_serve(args):
    from server import serve_stdio

    settings = _settings_or_exit()
    try:
        asyncio.run(serve_stdio(settings))
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Server stopped")
    return 0


def cmd_api(args):
    import uvicorn
    from api import create_app

    _settings_or_exit()
    uvicorn.run(create_app(), host=args.host, port=args.port, reload=False)
    return 0


def cmd_install_browser(args):
    from deep_search.runner import install_playwright

    install_playwright()
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Deep Search: web search that reads the pages it finds")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Run one deep search and print the report")
    search.add_argument("query", nargs="+", help="Search query")
    search.add_argument("--results", type=int, default=None, help="Search results to process (1-10, default 3)")
    search.add_argument("--depth", type=int, default=None, help="Link depth to follow (1-3, default 1)")
    search.add_argument("--output", default=None, help="Also save the report to this file")
    search.set_defaults(func=cmd_search)

    serve = sub.add_parser("serve", help="Run the MCP server on stdio")
    serve.set_defaults(func=cmd_serve)

    api = sub.add_parser("api", help="Run the HTTP API")
    api.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    api.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    api.set_defaults(func=cmd_api)

    install = sub.add_parser("install-browser", help="Install the Playwright Chromium browser")
    install.set_defaults(func=cmd_install_browser)

    args = parser.parse_args(argv)
    # SIGTERM takes the same shutdown path as Ctrl-C
    signal.signal(signal.SIGTERM, signal.default_int_handler)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
