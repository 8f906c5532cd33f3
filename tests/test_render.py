from api_docs_hub.render import VIEWER_SCRIPT_URL, render_html, viewer_configuration


class TestViewerConfiguration:
    def test_defaults(self):
        assert viewer_configuration({"openapi": "3.0.3"}) == {
            "content": {"openapi": "3.0.3"},
            "theme": "default",
            "layout": "modern",
            "showSidebar": True,
        }


class TestRenderHtml:
    def test_page_embeds_viewer_and_content(self):
        page = render_html("Pets", {"openapi": "3.0.3", "info": {"title": "Pets"}})
        assert VIEWER_SCRIPT_URL in page
        assert "<title>Pets</title>" in page
        assert '"openapi": "3.0.3"' in page
        assert '"layout": "modern"' in page

    def test_display_options(self):
        page = render_html("Pets", {}, theme="purple", layout="classic", show_sidebar=False)
        assert '"theme": "purple"' in page
        assert '"layout": "classic"' in page
        assert '"showSidebar": false' in page

    def test_title_is_escaped(self):
        page = render_html("<b>Pets</b>", {})
        assert "<title>&lt;b&gt;Pets&lt;/b&gt;</title>" in page

    def test_script_close_in_content_is_neutralized(self):
        page = render_html("X", {"description": "</script><script>alert(1)</script>"})
        assert "</script><script>alert(1)" not in page
