"""
Emoji image resolution tests.
"""
from EmojiResolver import convert_emoji_image, lookup_emoji


class TestConvertEmojiImage:
    """Test mapping emoji images to Unicode characters."""

    def test_prefers_unicode_in_alt(self):
        """A glyph already present in alt wins over the URL."""
        assert convert_emoji_image("Text with \U0001F600 emoji", "/emoji/twitter/heart.png") == "\U0001F600"

    def test_resolves_name_from_url(self):
        """The short name in /emoji/<set>/<name>.png is looked up."""
        result = convert_emoji_image("heart", "/emoji/twitter/heart.png")
        assert result.startswith("❤")

    def test_url_with_query_string(self):
        """Cache-busting query strings do not break extraction."""
        result = convert_emoji_image(":heart:", "https://forum.example.com/images/emoji/twitter/heart.png?v=12")
        assert result.startswith("❤")

    def test_falls_back_to_alt_name(self):
        """When the URL is not an emoji path, the alt text without colons is used."""
        assert convert_emoji_image(":smile:", "/not-emoji-path/image.png") == "\U0001F604"

    def test_unknown_emoji_returns_alt(self):
        """Unknown names degrade to the alt text unchanged."""
        assert convert_emoji_image("unknown_emoji", "/emoji/twitter/nonexistent.png") == "unknown_emoji"

    def test_empty_inputs(self):
        """Nothing to resolve gives an empty string."""
        assert convert_emoji_image("", "") == ""


class TestLookupEmoji:
    """Test the name table lookup."""

    def test_accepts_both_name_styles(self):
        """'heart' and ':heart:' resolve to the same character."""
        assert lookup_emoji("heart") == lookup_emoji(":heart:") != ""

    def test_unknown_name(self):
        """Unknown names give an empty string."""
        assert lookup_emoji("definitely_not_an_emoji_name") == ""
