# crawler/url_utils.py

# Decide which hrefs are worth following.
# Only http(s) document URLs survive; images, archives, static assets and
# admin/CDN paths are dropped before they reach the frontier.

from urllib.parse import urlparse, urljoin, urldefrag

ALLOWED_SCHEMES = {"http", "https"}

DISALLOWED_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".ico", ".bmp",
    ".mp4", ".webm", ".mp3", ".wav", ".ogg",
    ".pdf", ".zip", ".rar", ".7z", ".gz", ".tar",
    ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".exe", ".dmg", ".apk",
    ".css", ".js", ".mjs", ".map",
}

DISALLOWED_PATH_FRAGMENTS = (
    "/cdn-cgi/",
    "/wp-admin/",
    "/wp-content/uploads/",
)


def is_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.netloc)


def absolute_url(link: str, base_url: str) -> str:
    """
    Convert a (possibly relative) href to an absolute URL without its fragment.
    Example: '/about#team' on 'https://example.com/x' -> 'https://example.com/about'
    """
    url, _fragment = urldefrag(urljoin(base_url, link.strip()))
    return url


def is_probably_html_url(url: str) -> bool:
    """
    Heuristic filter: returns False for common binary/media/static assets by extension
    and for admin, CDN and media-upload paths.
    """
    path = urlparse(url).path.lower()
    if any(fragment in path for fragment in DISALLOWED_PATH_FRAGMENTS):
        return False
    return not any(path.endswith(ext) for ext in DISALLOWED_EXTENSIONS)


def is_followable_url(url: str) -> bool:
    return is_http_url(url) and is_probably_html_url(url)
