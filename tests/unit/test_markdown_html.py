"""Unit tests for HTML output of content nodes."""

from podsite.markdown import render, render_html


def to_html(text: str) -> str:
    return render_html(render(text))


class TestRenderHtml:
    """Tests for render_html over rendered markdown."""

    def test_heading_and_paragraph(self):
        html = to_html("# Title\n\nSome **bold** text")
        assert "<h1>Title</h1>" in html
        assert "<p>Some <strong>bold</strong> text</p>" in html

    def test_external_link_opens_new_context(self):
        html = to_html("[site](https://example.com)")
        assert 'href="https://example.com"' in html
        assert 'target="_blank"' in html
        assert 'rel="noopener noreferrer"' in html

    def test_internal_link_stays_in_context(self):
        html = to_html("[about](/about)")
        assert 'target="_self"' in html
        assert "noopener" not in html

    def test_text_is_escaped(self):
        html = to_html("<script>alert(1)</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_image_caption(self):
        html = to_html("![Studio](/studio.jpg)")
        assert '<img src="/studio.jpg" alt="Studio">' in html
        assert "<figcaption>Studio</figcaption>" in html

    def test_code_block_language_class(self):
        html = to_html("```python\nif a < b:\n```")
        assert '<code class="language-python">if a &lt; b:</code>' in html

    def test_list_and_rule(self):
        html = to_html("- a\n- b\n\n---")
        assert "<ul><li>a</li><li>b</li></ul>" in html
        assert "<hr>" in html

    def test_empty_nodes(self):
        assert render_html(render("")) == ""
