import re

import emoji


UNICODE_EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF"
    "\U0001F700-\U0001F77F\U0001F780-\U0001F7FF\U0001F800-\U0001F8FF"
    "\u2600-\u26FF\u2700-\u27BF]"
)

# /images/emoji/twitter/grinning.png?v=12 -> grinning
EMOJI_URL_PATTERN = re.compile(r"/emoji/[^/]+/([^/.?#]+)")


def lookup_emoji(name: str) -> str:
    """Return the glyph for a short name like 'heart' or ':heart:', or ''."""
    name = name.strip().strip(":")
    if not name:
        return ""
    shortcode = f":{name}:"
    glyph = emoji.emojize(shortcode, language="alias")
    return "" if glyph == shortcode else glyph


def convert_emoji_image(alt: str, src: str) -> str:
    """Turn a Discourse emoji <img> into its Unicode character.

    Falls back to the alt text when nothing matches.
    """
    alt = alt or ""
    src = src or ""

    unicode_match = UNICODE_EMOJI_PATTERN.search(alt)
    if unicode_match:
        return unicode_match.group(0)

    url_match = EMOJI_URL_PATTERN.search(src)
    emoji_name = url_match.group(1) if url_match else alt.strip(":")

    return lookup_emoji(emoji_name) or alt
