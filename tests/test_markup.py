"""Plain-text stripping and safe HTML tests"""

import pytest

from settingsgen.markup import clean_html, strip_tags


class TestStripTags:
    def test_removes_tags_and_collapses_whitespace(self):
        assert strip_tags("<p>Hello <em>big</em>\n world</p>") == "Hello big world"

    def test_drops_script_and_style_content(self):
        assert strip_tags("a<script>var x = 1;</script>b<style>p {}</style>c") == "abc"

    def test_keep_newlines(self):
        assert strip_tags(" one \n\t two  three ", keep_newlines=True) == "one\ntwo three"

    def test_empty(self):
        assert strip_tags("") == ""

    def test_keeps_comparison_signs(self):
        assert strip_tags("1 < 2 and 3 > 2") == "1 < 2 and 3 > 2"

    def test_entities_are_left_as_written(self):
        assert strip_tags("&amp;lt;b&amp;gt; &lt;i&gt;") == "&amp;lt;b&amp;gt; &lt;i&gt;"

    def test_drops_comments_and_control_characters(self):
        assert strip_tags("a<!-- hidden -->b\x00c") == "abc"

    @pytest.mark.parametrize(
        "value",
        ["<b>x</b>", "1 < 2", "&amp;lt;script&amp;gt;", "&lt;b&gt;y&lt;/b&gt;", "<p>a</p>\n\n<p>b</p>"],
    )
    def test_idempotent(self, value):
        once = strip_tags(value, keep_newlines=True)

        assert strip_tags(once, keep_newlines=True) == once
        assert strip_tags(strip_tags(value)) == strip_tags(value)


class TestCleanHtml:
    def test_empty_input(self):
        assert clean_html("") == ""
        assert clean_html("   ") == ""

    def test_allowed_markup_is_kept(self):
        assert clean_html("<p>Hello <strong>world</strong></p>") == "<p>Hello <strong>world</strong></p>"

    def test_disallowed_tags_are_unwrapped(self):
        result = clean_html("<p><blink>still here</blink></p>")

        assert result == "<p>still here</p>"

    def test_dangerous_tags_are_removed_with_content(self):
        result = clean_html("<p>ok</p><iframe src='https://acme.io'>nested</iframe><script>x()</script>")

        assert result == "<p>ok</p>"

    def test_comments_are_removed(self):
        assert clean_html("<p>a<!-- hidden -->b</p>") == "<p>ab</p>"

    def test_event_handlers_and_unknown_attributes_are_removed(self):
        result = clean_html('<img src="https://acme.io/a.png" onerror="x()" data-x="1" alt="A">')

        assert 'src="https://acme.io/a.png"' in result
        assert 'alt="A"' in result
        assert "onerror" not in result
        assert "data-x" not in result

    def test_unsafe_link_schemes_are_removed(self):
        result = clean_html(
            '<a href="javascript:alert(1)">bad</a> <a href="mailto:admin@acme.io">mail</a> '
            '<a href="/relative">rel</a>'
        )

        assert "javascript" not in result
        assert '<a>bad</a>' in result
        assert 'href="mailto:admin@acme.io"' in result
        assert 'href="/relative"' in result

    def test_style_attribute_is_removed(self):
        assert clean_html('<p style="color: red" class="lead">x</p>') == '<p class="lead">x</p>'
