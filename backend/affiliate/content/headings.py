import re
from dataclasses import dataclass
from typing import List

HEADING_RE = re.compile(r"<h([23])([^>]*)>(.*?)</h\1\s*>", re.IGNORECASE | re.DOTALL)
ID_ATTR_RE = re.compile(r"""\bid\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)
TAG_RE = re.compile(r"<[^>]+>")


@dataclass(frozen=True)
class Heading:
    id: str
    text: str
    level: int


def heading_id(text: str) -> str:
    """``"What's New in 2024?"`` -> ``"whats-new-in-2024"``"""
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _text(inner_html: str) -> str:
    return TAG_RE.sub("", inner_html).strip()


def add_heading_ids(html: str) -> str:
    """Give every ``h2``/``h3`` without an ``id`` one derived from its text.

    Repeated headings get ``-2``, ``-3`` suffixes so anchors stay unique.
    """
    if not html:
        return html

    used = {m.group(2) for m in ID_ATTR_RE.finditer(html)}

    def replace(match):
        level, attrs, inner = match.groups()
        if ID_ATTR_RE.search(attrs):
            return match.group(0)

        base = heading_id(_text(inner))
        if not base:
            return match.group(0)

        candidate, n = base, 2
        while candidate in used:
            candidate = f"{base}-{n}"
            n += 1
        used.add(candidate)
        return f'<h{level}{attrs} id="{candidate}">{inner}</h{level}>'

    return HEADING_RE.sub(replace, html)


def extract_headings(html: str) -> List[Heading]:
    """Table of contents entries for the ``h2``/``h3`` elements of ``html``."""
    if not html:
        return []

    headings = []
    for match in HEADING_RE.finditer(html):
        level, attrs, inner = match.groups()
        text = _text(inner)
        if not text:
            continue
        existing = ID_ATTR_RE.search(attrs)
        headings.append(Heading(
            id=existing.group(2) if existing else heading_id(text),
            text=text,
            level=int(level),
        ))
    return headings
