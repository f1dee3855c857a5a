from bs4 import BeautifulSoup, Comment
from markupsafe import Markup

# Removed together with everything inside them
DROP_TAGS = (
    "script", "style", "iframe", "frame", "frameset", "noframes", "object", "embed",
    "applet", "form", "input", "button", "textarea", "select", "link", "meta", "base",
    "svg", "math", "template", "noscript", "title", "head", "audio", "video", "canvas",
)

ALLOWED_TAGS = {
    "p", "br", "hr", "div", "span", "section", "article", "aside",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "strong", "b", "em", "i", "u", "s", "sub", "sup", "small", "mark", "abbr", "time",
    "blockquote", "q", "cite", "code", "pre", "kbd",
    "ul", "ol", "li", "dl", "dt", "dd",
    "a", "img", "figure", "figcaption",
    "table", "caption", "colgroup", "col", "thead", "tbody", "tfoot", "tr", "th", "td",
    "details", "summary",
}

GLOBAL_ATTRS = {"id", "class", "title", "lang", "dir"}
ALLOWED_ATTRS = {
    "a": {"href", "target", "rel", "name"},
    "img": {"src", "alt", "width", "height", "loading"},
    "blockquote": {"cite"},
    "q": {"cite"},
    "ol": {"start", "type"},
    "time": {"datetime"},
    "col": {"span"},
    "colgroup": {"span"},
    "th": {"colspan", "rowspan", "scope"},
    "td": {"colspan", "rowspan"},
}

URL_ATTRS = {"href", "src", "cite"}
ALLOWED_SCHEMES = {"http", "https", "mailto", "tel"}


def _is_allowed_url(value) -> bool:
    if isinstance(value, list):
        value = " ".join(value)
    # Browsers ignore whitespace and control characters inside the scheme
    cleaned = "".join(ch for ch in str(value) if ch > " ").lower()
    scheme, sep, _ = cleaned.partition(":")
    if not sep or any(ch in scheme for ch in "/?#"):
        return True  # relative URL
    return scheme in ALLOWED_SCHEMES


def sanitize_html(html: str) -> Markup:
    """Reduce stored HTML to an allow-list of tags, attributes and URL schemes.

    Dangerous containers are dropped with their content; any other unknown
    tag is unwrapped so its text survives.
    """
    if not html:
        return Markup("")

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    tag = soup.find(DROP_TAGS)
    while tag is not None:
        tag.decompose()
        tag = soup.find(DROP_TAGS)

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()

    for tag in soup.find_all(True):
        allowed = GLOBAL_ATTRS | ALLOWED_ATTRS.get(tag.name, set())
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag.attrs[attr]
            elif attr in URL_ATTRS and not _is_allowed_url(tag.attrs[attr]):
                del tag.attrs[attr]

        if tag.name == "a" and tag.get("target") == "_blank":
            tag["rel"] = "noopener noreferrer"

    return Markup(str(soup))
