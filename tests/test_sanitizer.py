"""
HTML sanitizer tests.
"""
from Sanitizer import sanitize


class TestSanitize:
    """Test the archival tag and attribute allowlist."""

    def test_keeps_allowed_tags(self):
        """Allowed tags pass through untouched."""
        assert sanitize("<p>Hello <strong>world</strong></p>") == "<p>Hello <strong>world</strong></p>"

    def test_unwraps_disallowed_tags(self):
        """Disallowed tags are removed but their text survives."""
        assert sanitize("<p>Safe content</p><div>unwanted div</div>") == "<p>Safe content</p>unwanted div"

    def test_keeps_allowed_attributes(self):
        """href and title are allowed on links."""
        html = '<a href="https://example.com" title="Link">Text</a>'
        assert sanitize(html) == html

    def test_drops_disallowed_attributes(self):
        """Event handlers are dropped, the element stays."""
        assert sanitize('<p onclick="evil()">Text</p>') == "<p>Text</p>"

    def test_drops_data_attributes_keeps_class(self):
        """data-* attributes never survive, class does."""
        result = sanitize('<aside class="onebox" data-onebox-src="https://x.com">Preview</aside>')
        assert result == '<aside class="onebox">Preview</aside>'

    def test_removes_scripts_and_styles_entirely(self):
        """Script and style content is not kept as text."""
        result = sanitize("<script>alert(1)</script><style>p {}</style><p>ok</p>")
        assert result == "<p>ok</p>"

    def test_removes_javascript_urls_and_comments(self):
        """javascript: links lose their href; comments disappear."""
        result = sanitize('<!-- hidden --><a href="javascript:alert(1)">x</a>')
        assert result == "<a>x</a>"

    def test_nested_disallowed_tags_keep_allowed_children(self):
        """Allowed elements inside unwrapped containers survive."""
        html = '<div class="lightbox-wrapper"><a class="lightbox" href="a.png"><img src="a.png" width="690"><span>a.png</span></a></div>'
        result = sanitize(html)
        assert result == '<a class="lightbox" href="a.png"><img src="a.png"/>a.png</a>'

    def test_idempotent(self):
        """Sanitizing already sanitized output changes nothing."""
        html = '<div><p style="x" class="a b">One<br>Two</p><table><tr><td>cell</td></tr></table><img src="i.png" alt="i" onerror="x()"></div>'
        once = sanitize(html)
        assert sanitize(once) == once

    def test_empty_input(self):
        """Empty and missing HTML produce an empty string."""
        assert sanitize("") == ""
        assert sanitize(None) == ""
