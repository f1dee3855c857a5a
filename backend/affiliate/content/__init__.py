from .autolink import auto_link_content, count_auto_links, remove_auto_links
from .headings import Heading, add_heading_ids, extract_headings, heading_id
from .renderer import (
    Linkables,
    ProductLookup,
    RenderedBlock,
    prepare_content,
    render_blocks,
    render_content,
)
from .sanitizer import sanitize_html
from .shortcodes import (
    ComparisonBlock,
    HtmlBlock,
    ProductBlock,
    ProductGridBlock,
    ShortcodeReferences,
    extract_shortcode_references,
    parse_content,
    validate_shortcodes,
)

__all__ = [
    "auto_link_content",
    "count_auto_links",
    "remove_auto_links",
    "Heading",
    "add_heading_ids",
    "extract_headings",
    "heading_id",
    "Linkables",
    "ProductLookup",
    "RenderedBlock",
    "prepare_content",
    "render_blocks",
    "render_content",
    "sanitize_html",
    "ComparisonBlock",
    "HtmlBlock",
    "ProductBlock",
    "ProductGridBlock",
    "ShortcodeReferences",
    "extract_shortcode_references",
    "parse_content",
    "validate_shortcodes",
]
