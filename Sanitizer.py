from bs4 import BeautifulSoup, Comment


ALLOWED_TAGS = frozenset([
    "p", "br", "strong", "em", "u", "a", "img", "blockquote", "code", "pre",
    "ul", "ol", "li", "h1", "h2", "h3", "h4", "h5", "h6", "aside",
])

ALLOWED_ATTRS = frozenset(["href", "src", "alt", "title", "class"])

URL_ATTRS = frozenset(["href", "src"])

# Tags whose text is never meant to be read, so they go away with their content
DROP_CONTENT_TAGS = frozenset([
    "script", "style", "noscript", "template", "iframe", "object", "embed",
    "svg", "math", "select", "textarea", "title", "head",
])

UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:text/html")


def _is_safe_url(value: str) -> bool:
    probe = "".join(value.split()).lower()
    return not probe.startswith(UNSAFE_SCHEMES)


def clean_attrs(tag) -> None:
    """Keep only allowlisted attributes on a tag."""
    kept = {}
    for name, value in tag.attrs.items():
        if name not in ALLOWED_ATTRS:
            continue
        if name in URL_ATTRS and not _is_safe_url(str(value)):
            continue
        kept[name] = value
    tag.attrs = kept


def sanitize(html: str) -> str:
    """Strip cooked post HTML down to the archival allowlist.

    Disallowed tags are unwrapped so their text survives; disallowed
    attributes are dropped while the element is kept. Script-like tags,
    comments and data-* attributes never make it through.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        if tag.name in DROP_CONTENT_TAGS:
            tag.decompose()
        elif tag.name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            clean_attrs(tag)

    return str(soup)
