"""Tests for HTML minification."""

from __future__ import annotations

import unittest

from webber.site.minify import MinifyOptions, minify, minify_css, minify_style_attribute


class TestMinifyDefaults(unittest.TestCase):
    def test_strips_comments(self) -> None:
        self.assertEqual(minify("<p>a</p><!-- note --><p>b</p>"), "<p>a</p><p>b</p>")

    def test_keeps_bang_comments(self) -> None:
        html = "<!--! license --><p>a</p>"
        self.assertEqual(minify(html), html)

    def test_preserves_whitespace(self) -> None:
        html = "<div>\n  <p>a\n   b</p>\n</div>\n"
        self.assertEqual(minify(html), html)

    def test_does_not_decode_entities(self) -> None:
        html = '<a href="?a=1&amp;b=2">&nbsp;&lt;x&gt; &#169;</a>'
        self.assertEqual(minify(html), html)

    def test_keeps_doctype(self) -> None:
        html = "<!DOCTYPE html><html></html>"
        self.assertEqual(minify(html), html)

    def test_collapses_boolean_attributes(self) -> None:
        result = minify('<input type="checkbox" checked="checked" disabled="">')
        self.assertEqual(result, '<input type="checkbox" checked disabled>')

    def test_keeps_closing_slash(self) -> None:
        self.assertEqual(minify("<br/>"), "<br/>")
        self.assertEqual(minify('<img src="a.png" />'), '<img src="a.png"/>')

    def test_keeps_attribute_quotes_and_empty_attributes(self) -> None:
        html = '<div class="card" title="">x</div>'
        self.assertEqual(minify(html), html)

    def test_quotes_unquoted_attributes(self) -> None:
        self.assertEqual(minify("<div class=card>x</div>"), '<div class="card">x</div>')

    def test_keeps_optional_tags_and_type_attributes(self) -> None:
        html = '<ul><li>a</li></ul><script type="text/javascript"></script><style type="text/css"></style>'
        self.assertEqual(minify(html), html)

    def test_minifies_style_element(self) -> None:
        result = minify("<style>\na {\n  color: red;\n}\n</style>")
        self.assertEqual(result, "<style>a{color:red}</style>")

    def test_minifies_style_attribute(self) -> None:
        result = minify('<h2 style="text-align: center;">Tag</h2>')
        self.assertEqual(result, '<h2 style="text-align:center">Tag</h2>')

    def test_minifies_script(self) -> None:
        result = minify("<script>\nvar a = 1;\n\n\nvar b = 2;\n</script>")
        self.assertIn("var a=1;", result)
        self.assertIn("var b=2;", result)
        self.assertNotIn("\n\n", result)

    def test_leaves_non_js_scripts_alone(self) -> None:
        html = '<script type="text/template">\n  <b> {{ x }} </b>\n</script>'
        self.assertEqual(minify(html), html)

    def test_invalid_css_is_kept(self) -> None:
        html = "<style>a { color: red;</style>"
        self.assertEqual(minify(html), html)

    def test_keeps_trailing_slash_of_unquoted_value(self) -> None:
        self.assertEqual(minify("<a href=/foo/>x</a>"), '<a href="/foo/">x</a>')

    def test_self_closing_after_unquoted_value(self) -> None:
        self.assertEqual(minify("<img src=a.png />"), '<img src="a.png"/>')

    def test_keeps_references_without_semicolon(self) -> None:
        html = "<p>&nbsp x &amp y &#169 z</p>\n<p>&nbsp;</p>"
        self.assertEqual(minify(html), html)

    def test_trims_whitespace_around_custom_fragments(self) -> None:
        result = minify("<p>x</p>\n<?php echo 1; ?>\n<p>y</p>")
        self.assertEqual(result, "<p>x</p><?php echo 1; ?><p>y</p>")

    def test_leaves_line_comment_css_unminified(self) -> None:
        html = "<style>a{color:red} // x\nb{color:blue}</style>"
        self.assertEqual(minify(html), html)

    def test_minifies_css_with_protocol_relative_url(self) -> None:
        result = minify("<style>\na { background: url(//cdn.test/x.png); }\n</style>")
        self.assertEqual(result, "<style>a{background:url(//cdn.test/x.png)}</style>")

    def test_processes_conditional_comments(self) -> None:
        result = minify("<!--[if lt IE 9]><script>var a = 1;</script><![endif]-->")
        self.assertEqual(result, "<!--[if lt IE 9]><script>var a=1;</script><![endif]-->")


class TestMinifyOptions(unittest.TestCase):
    def test_remove_attribute_quotes(self) -> None:
        options = MinifyOptions(remove_attribute_quotes=True)
        self.assertEqual(
            minify('<div class="card" title="a b">x</div>', options),
            '<div class=card title="a b">x</div>',
        )

    def test_drop_closing_slash(self) -> None:
        self.assertEqual(minify("<br/>", MinifyOptions(keep_closing_slash=False)), "<br>")

    def test_collapse_whitespace_spares_pre(self) -> None:
        options = MinifyOptions(collapse_whitespace=True)
        result = minify("<p>a \n\n b</p><pre>x\n\n y</pre>", options)
        self.assertEqual(result, "<p>a b</p><pre>x\n\n y</pre>")

    def test_keep_custom_fragment_whitespace(self) -> None:
        html = "<p>x</p>\n<?php echo 1; ?>\n<p>y</p>"
        self.assertEqual(minify(html, MinifyOptions(trim_custom_fragments=False)), html)

    def test_keep_comments(self) -> None:
        html = "<p>a</p><!-- note -->"
        self.assertEqual(minify(html, MinifyOptions(remove_comments=False)), html)

    def test_remove_optional_tags(self) -> None:
        options = MinifyOptions(remove_optional_tags=True)
        self.assertEqual(minify("<ul><li>a</li><li>b</li></ul>", options), "<ul><li>a<li>b</ul>")

    def test_remove_type_attributes(self) -> None:
        options = MinifyOptions(
            remove_script_type_attributes=True,
            remove_style_link_type_attributes=True,
        )
        html = '<script type="text/javascript"></script><link rel="stylesheet" type="text/css" href="a.css">'
        self.assertEqual(
            minify(html, options),
            '<script></script><link rel="stylesheet" href="a.css">',
        )

    def test_remove_empty_attributes(self) -> None:
        options = MinifyOptions(remove_empty_attributes=True)
        self.assertEqual(minify('<div class="" data-x="">x</div>', options), '<div data-x="">x</div>')

    def test_no_css_minification(self) -> None:
        html = '<p style="color: red;">x</p>'
        self.assertEqual(minify(html, MinifyOptions(minify_css=False)), html)


class TestCssHelpers(unittest.TestCase):
    def test_minify_css_blank(self) -> None:
        self.assertEqual(minify_css("  \n"), "  \n")

    def test_minify_style_attribute_blank(self) -> None:
        self.assertEqual(minify_style_attribute(""), "")


if __name__ == "__main__":
    unittest.main()
