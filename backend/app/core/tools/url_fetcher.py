# backend/app/core/tools/url_fetcher.py
import re
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from backend.app.core import settings

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n[Content truncated due to length]"
DOCUMENTATION_LABEL = "Documentation"
CODE_LABEL = "Code (raw text expected)"

_ACCEPT = "text/plain, text/html, application/json, */*"


def html_to_text(raw: str) -> str:
    """Reduce an HTML page to the visible text of its body."""
    soup = BeautifulSoup(raw, "html.parser")
    root = soup.body or soup
    for tag in root.find_all(["script", "style"]):
        tag.decompose()
    return re.sub(r"\s+", " ", root.get_text(" ")).strip()


def truncate(text: str, limit: int = settings.MAX_URL_CONTENT_LENGTH) -> str:
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


async def fetch_url_content(
    url: str,
    label: str,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Fetch `url` and return a labeled block ready to append to the learner's content.

    A failed fetch does not raise: the returned block names the error instead,
    so the plan can still be generated from whatever else was provided.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.URL_FETCH_TIMEOUT_SECONDS, follow_redirects=True)

    try:
        resp = await client.get(url, headers={"Accept": _ACCEPT})
        if resp.is_error:
            logger.error(f"Failed to fetch {label} URL {url}: {resp.status_code} {resp.reason_phrase}")
            return f"\n\n[Error fetching {label} from {url}: {resp.reason_phrase or resp.status_code}]"
        text = resp.text
    except httpx.HTTPError as e:
        logger.error(f"Error fetching {label} URL {url}: {e}")
        return f"\n\n[Exception while fetching {label} from {url}: {str(e) or 'Unknown error'}]"
    finally:
        if owns_client:
            await client.aclose()

    if "<html" in text.lower():
        text = html_to_text(text)

    return f"\n\n--- {label} from URL ({url}) ---\n{truncate(text)}"


async def assemble_content(
    content: str,
    documentation_url: Optional[str] = None,
    code_url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    assembled = content or ""
    if documentation_url:
        assembled += await fetch_url_content(documentation_url, DOCUMENTATION_LABEL, client)
    if code_url:
        assembled += await fetch_url_content(code_url, CODE_LABEL, client)
    return assembled
