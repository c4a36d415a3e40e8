from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import calendar
import time

from feedparser.datetimes import _parse_date
from bs4 import BeautifulSoup


def _to_datetime(entry: Dict[str, Any]) -> Optional[datetime]:
    """
    Convert feed entry date fields to timezone-aware UTC datetime.
    Priority: published_parsed -> updated_parsed -> created_parsed -> None.
    """
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                # feedparser normalizes *_parsed values to UTC
                return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)
            except (OverflowError, ValueError):
                continue
    # Fallback: string timestamps when feedparser left *_parsed empty.
    for key in ("published", "updated", "created"):
        s = entry.get(key)
        if isinstance(s, str) and s:
            parsed = _parse_date(s)
            if isinstance(parsed, time.struct_time):
                try:
                    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
                except (OverflowError, ValueError):
                    continue
    return None


def _to_text(html: str) -> str:
    if not html or "<" not in html:
        return html.strip()
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


def _get_description(entry: Dict[str, Any]) -> str:
    summary = entry.get("summary") or entry.get("description")
    if isinstance(summary, str) and summary.strip():
        return _to_text(summary)
    content = entry.get("content")
    if isinstance(content, list) and content:
        value = content[0].get("value") if isinstance(content[0], dict) else None
        if isinstance(value, str):
            return _to_text(value)
    return ""


def parse_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser) to a dict with common fields.
    Fields: title, description, link, published_at (datetime|None), guid
    """
    title = (entry.get("title") or "").strip()
    description = _get_description(entry)
    link = (entry.get("link") or entry.get("feedburner_origlink") or "").strip()

    # Prefer entry id/guid if present
    guid = None
    for k in ("id", "guid"):
        v = entry.get(k)
        if isinstance(v, str) and v.strip():
            guid = v.strip()
            break

    return {
        "title": title,
        "description": description,
        "link": link,
        "published_at": _to_datetime(entry),
        "guid": guid,
    }
