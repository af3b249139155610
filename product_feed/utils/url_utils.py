"""URL 유틸리티"""
import re
from urllib.parse import quote_plus

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def normalize_href(href: str, base_url: str = "https://www.amazon.com") -> str:
    """상대/프로토콜-상대 href를 절대 URL로 정규화합니다.

    - "//host/path" -> "https://host/path"
    - "/path", "path" -> "{base_url}/path"
    - "http(s)://..." -> 그대로
    - 그 밖의 scheme (data:, javascript: 등) -> ""
    """
    if not href:
        return ""

    h = href.strip()
    if not h:
        return ""

    if h.startswith("//"):
        return f"https:{h}"

    if h.startswith("/"):
        return f"{base_url.rstrip('/')}{h}"

    if h.lower().startswith(("http://", "https://")):
        return h

    if _SCHEME_RE.match(h):
        return ""

    return f"{base_url.rstrip('/')}/{h}"


def build_search_url(query: str, base_url: str = "https://www.amazon.com", ref: str = "nb_sb_noss") -> str:
    """검색 결과 페이지 URL 생성

    Examples:
        >>> build_search_url("usb c cable")
        'https://www.amazon.com/s?k=usb+c+cable&ref=nb_sb_noss'
    """
    return f"{base_url.rstrip('/')}/s?k={quote_plus(query)}&ref={ref}"
