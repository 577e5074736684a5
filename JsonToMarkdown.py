import re
import textwrap
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Sequence

import html2text
from bs4 import BeautifulSoup, NavigableString, Tag

from EmojiResolver import convert_emoji_image


CONTENT_IMAGE_WIDTH = 320
SMALL_IMAGE_LIMIT = 100

# Private-use delimiters hold injected markdown while html2text escapes the surrounding text
PLACEHOLDER_TEMPLATE = "\ue000{}\ue001"
PLACEHOLDER_PATTERN = re.compile("\ue000(\\d+)\ue001")

LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class ElementNode:
    """Read-only view of an HTML element that the conversion rules inspect."""
    name: str
    attrs: Dict[str, str] = field(default_factory=dict)
    classes: FrozenSet[str] = frozenset()
    parent: Optional["ElementNode"] = None

    def get(self, attr: str) -> str:
        return self.attrs.get(attr, "")

    def has_class(self, class_name: str) -> bool:
        return class_name in self.classes

    def ancestors(self) -> Iterator["ElementNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def closest(self, class_name: str) -> Optional["ElementNode"]:
        if self.has_class(class_name):
            return self
        for node in self.ancestors():
            if node.has_class(class_name):
                return node
        return None


def element_shape(tag: Tag) -> ElementNode:
    chain = [tag] + [parent for parent in tag.parents if parent.name != "[document]"]
    node = None
    for item in reversed(chain):
        attrs = {}
        for name, value in item.attrs.items():
            attrs[name] = " ".join(value) if isinstance(value, list) else str(value)
        node = ElementNode(
            name=item.name,
            attrs=attrs,
            classes=frozenset(attrs.get("class", "").split()),
            parent=node,
        )
    return node


def is_avatar_url(url: str) -> bool:
    return "user_avatar" in url or "/avatar/" in url


def is_inside_onebox(node: ElementNode) -> bool:
    return node.closest("onebox") is not None


def _leading_int(value: str) -> Optional[int]:
    match = LEADING_INT_PATTERN.match(value or "")
    return int(match.group(1)) if match else None


def sized_image(src: str) -> str:
    return f"![|{CONTENT_IMAGE_WIDTH}]({src})"


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[ElementNode], bool]
    replacement: Callable[[ElementNode], str]


# Onebox previews are dropped; their links come back from link_counts instead
def is_onebox(node: ElementNode) -> bool:
    return node.name == "aside" and (node.has_class("onebox") or node.has_class("allowlistedgeneric"))


def replace_onebox(node: ElementNode) -> str:
    return ""


def is_lightbox(node: ElementNode) -> bool:
    return node.name == "a" and node.has_class("lightbox")


def replace_lightbox(node: ElementNode) -> str:
    href = node.get("href")
    if is_avatar_url(href) or is_inside_onebox(node):
        return ""
    return sized_image(href)


def is_image(node: ElementNode) -> bool:
    return node.name == "img"


def replace_image(node: ElementNode) -> str:
    src = node.get("src")
    alt = node.get("alt")

    if node.parent is not None and node.parent.has_class("lightbox"):
        return ""
    if is_inside_onebox(node):
        return ""

    if "emoji" in src or "emoji" in alt:
        return convert_emoji_image(alt, src)

    if is_avatar_url(src):
        return ""

    width = _leading_int(node.get("width"))
    height = _leading_int(node.get("height"))
    if (width is not None and width < SMALL_IMAGE_LIMIT) or (height is not None and height < SMALL_IMAGE_LIMIT):
        return f"![{alt}]({src})"

    return sized_image(src)


DEFAULT_RULES = (
    Rule("onebox", is_onebox, replace_onebox),
    Rule("discourseImage", is_lightbox, replace_lightbox),
    Rule("regularImage", is_image, replace_image),
)


class MarkdownText(NavigableString):
    """Markdown produced by a rule; it is emitted as-is, never escaped."""


def apply_rules(soup: BeautifulSoup, rules: Sequence[Rule] = DEFAULT_RULES) -> BeautifulSoup:
    """Rewrite matching elements in document order; the first matching rule wins.

    A matched element is replaced by its markdown text, or removed when the
    replacement is empty, so its descendants are never visited.
    """
    stack = list(reversed(list(soup.children)))
    while stack:
        node = stack.pop()
        if not isinstance(node, Tag):
            continue

        shape = element_shape(node)
        rule = next((r for r in rules if r.matches(shape)), None)
        if rule is None:
            stack.extend(reversed(list(node.children)))
            continue

        markdown = rule.replacement(shape)
        if markdown:
            node.replace_with(MarkdownText(markdown))
        else:
            node.decompose()
    return soup


def protect_markdown(soup: BeautifulSoup) -> List[str]:
    """Swap rule output for numbered placeholders and return the originals."""
    protected: List[str] = []
    for text in soup.find_all(string=lambda s: isinstance(s, MarkdownText)):
        protected.append(str(text))
        text.replace_with(PLACEHOLDER_TEMPLATE.format(len(protected) - 1))
    return protected


def restore_markdown(markdown: str, protected: Sequence[str]) -> str:
    return PLACEHOLDER_PATTERN.sub(lambda match: protected[int(match.group(1))], markdown)


def close_code_fences(markdown: str) -> str:
    """Drop blank lines html2text leaves before a closing ``` fence."""
    lines: List[str] = []
    in_fence = False
    for line in markdown.split("\n"):
        if line.lstrip("> ").startswith("```"):
            if in_fence:
                while lines and not lines[-1].lstrip("> ").strip():
                    lines.pop()
            in_fence = not in_fence
        lines.append(line)
    return "\n".join(lines)


def create_markdowner() -> html2text.HTML2Text:
    markdowner = html2text.HTML2Text()
    markdowner.ignore_links = False
    markdowner.ignore_images = False
    markdowner.ignore_emphasis = False
    markdowner.escape_snob = True
    markdowner.body_width = 0
    markdowner.unicode_snob = True
    markdowner.backquote_code_style = True
    return markdowner


class MarkdownConverter:
    """HTML to markdown conversion with the Discourse-specific rules applied first."""

    def __init__(self, rules: Optional[Sequence[Rule]] = None):
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES

    def convert(self, html: str) -> str:
        soup = BeautifulSoup(html or "", "html.parser")
        apply_rules(soup, self.rules)
        protected = protect_markdown(soup)
        # HTML2Text keeps parser state between calls, so use a fresh one per document
        markdown = create_markdowner().handle(str(soup))
        markdown = close_code_fences(restore_markdown(markdown, protected))
        # html2text indents every list item; dedent evenly so a leading list stays flat
        return textwrap.dedent(markdown).strip("\n").rstrip()
