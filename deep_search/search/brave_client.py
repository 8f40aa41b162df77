# search/brave_client.py

# Thin client for the Brave Search web endpoint.
# Every failure (auth, rate limit, transport, non-2xx) surfaces as SearchError.
# No retries: a failed search fails the request.

import asyncio
from typing import List, Optional

import aiohttp

from config import BRAVE_SEARCH_URL, DEFAULT_RESULTS, MAX_RESULTS, SEARCH_TIMEOUT_S
from deep_search.errors import SearchError
from deep_search.storage.models import SeedResult
from utils.logger import setup_logger

logger = setup_logger(__name__)


def describe_status(status: int, reason: Optional[str] = None) -> str:
    if status in (401, 403):
        detail = "authentication failed, check BRAVE_API_KEY"
    elif status == 429:
        detail = "rate limit exceeded"
    else:
        detail = reason or "unexpected response"
    return f"Brave Search API error: {status} {detail}"


def parse_web_results(data) -> List[SeedResult]:
    """Map the `web.results` block of a Brave response to SeedResults."""
    if not isinstance(data, dict):
        return []
    web = data.get("web") or {}
    results = []
    for item in web.get("results") or []:
        url = (item or {}).get("url")
        if not url:
            continue
        results.append(SeedResult(
            url=url,
            title=item.get("title") or "",
            description=item.get("description") or "",
        ))
    return results


class BraveSearchClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = BRAVE_SEARCH_URL,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_s: float = SEARCH_TIMEOUT_S,
    ):
        if not api_key:
            raise SearchError("Brave Search API key is required")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.session = session
        self._owns_session = session is None

    async def _get_session(self):
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout_s)
            self.session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self.session

    async def web_search(self, query: str, count: int = DEFAULT_RESULTS, offset: int = 0) -> List[SeedResult]:
        if not query or not query.strip():
            raise SearchError("Search query is required")
        count = max(1, min(count, MAX_RESULTS))

        params = {"q": query, "count": str(count), "offset": str(offset)}
        headers = {
            "Accept": "application/json",
            "X-Subscription-Token": self.api_key,
        }
        logger.debug(f"Performing Brave web search: {query!r} (count {count})")

        session = await self._get_session()
        try:
            async with session.get(self.base_url, params=params, headers=headers) as resp:
                if not 200 <= resp.status < 300:
                    raise SearchError(describe_status(resp.status, resp.reason), status=resp.status)
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Brave Search request failed: {e!r}")
            raise SearchError(f"Brave Search request failed: {str(e) or e.__class__.__name__}") from e
        except ValueError as e:
            raise SearchError(f"Brave Search returned invalid JSON: {e}") from e

        results = parse_web_results(data)[:count]
        logger.info(f"Brave search {query!r} returned {len(results)} results")
        return results

    async def close(self):
        if self._owns_session and self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None
