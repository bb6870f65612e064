"""YouTube link recognition and embeddable player URL construction"""

import re
from typing import Optional
from urllib.parse import parse_qs, urlsplit


YOUTUBE_RE = re.compile(
    r"(?:https?://)?(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)([A-Za-z0-9_-]{11})\S*"
)
EMBED_BASE_URL = "https://www.youtube.com/embed/"
SECONDS_RE = re.compile(r"^(\d+)s?$")
TRAILING_PUNCTUATION = ".,;:!?)"


def match_youtube(text: str) -> Optional[re.Match]:
    """Return the first YouTube watch/short URL match in text, or None."""
    return YOUTUBE_RE.search(text)


def trim_url(url: str) -> str:
    """Drop sentence punctuation that \\S* picked up after a URL written in prose."""
    return url.rstrip(TRAILING_PUNCTUATION)


def extract_video_id(url: str) -> Optional[str]:
    """Return the 11-character video id from a watch or youtu.be URL, else None."""
    m = match_youtube(url)
    return m.group(1) if m else None


def _seconds(value: Optional[str]) -> Optional[int]:
    """Parse non-negative integer seconds ('90' or '90s'); None when missing or malformed."""
    if not value:
        return None
    m = SECONDS_RE.match(value.strip())
    return int(m.group(1)) if m else None


def _query(url: str) -> dict[str, list[str]]:
    """Parse the query string of a URL that may lack a scheme."""
    query = urlsplit(url).query if "://" in url else url.partition("?")[2]
    return parse_qs(query, keep_blank_values=True)


def _first(params: dict[str, list[str]], *keys: str) -> Optional[str]:
    """Return the first non-empty value among keys, in key order."""
    for key in keys:
        values = params.get(key)
        if values and values[0]:
            return values[0]
    return None


def build_embed_url(url: str) -> Optional[str]:
    """Build a player URL for a YouTube link, forwarding valid start/end times.

    Start time comes from 't', or 'start' when 't' is missing or empty.
    Malformed times are omitted, never defaulted. Returns None when no video
    id can be extracted; callers should then render a plain link.
    """
    video_id = extract_video_id(url)
    if video_id is None:
        return None

    params = _query(trim_url(url))
    start = _seconds(_first(params, "t", "start"))
    end = _seconds(_first(params, "end"))

    query = []
    if start is not None:
        query.append(f"start={start}")
    if end is not None:
        query.append(f"end={end}")

    embed_url = f"{EMBED_BASE_URL}{video_id}"
    return f"{embed_url}?{'&'.join(query)}" if query else embed_url
