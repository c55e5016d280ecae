"""Tests for inline style normalization."""

import xml.etree.ElementTree as ET

from svgcleaner.core import style


class TestParseStyle:
    """Tests for the inline style micro-parser."""

    def test_parse_keeps_order(self) -> None:
        """Test that properties are returned in source order."""
        styles = style.parse_style("stroke:none;fill:red;opacity:0.5")
        assert list(styles) == ["stroke", "fill", "opacity"]

    def test_parse_strips_whitespace(self) -> None:
        """Test that whitespace around names and values is ignored."""
        assert style.parse_style(" fill : red ; stroke:\tnone ") == {
            "fill": "red",
            "stroke": "none",
        }

    def test_parse_drops_malformed_entries(self) -> None:
        """Test that entries without exactly one colon are dropped."""
        styles = style.parse_style("fill:red;bogus;a:b:c;;stroke:blue")
        assert styles == {"fill": "red", "stroke": "blue"}

    def test_parse_missing_style(self) -> None:
        """Test that a missing style yields an empty map."""
        assert style.parse_style(None) == {}
        assert style.parse_style("") == {}

    def test_render_style(self) -> None:
        """Test serialization of a property map."""
        assert style.render_style({"fill": "red", "stroke": "none"}) == (
            "fill:red;stroke:none;"
        )
        assert style.render_style({}) == ""


class TestParseNumber:
    """Tests for leading-number parsing."""

    def test_parse_number(self) -> None:
        """Test that the leading number is parsed."""
        assert style.parse_number("0") == 0.0
        assert style.parse_number("0.5") == 0.5
        assert style.parse_number(".0") == 0.0
        assert style.parse_number("1e-3") == 0.001

    def test_parse_number_invalid(self) -> None:
        """Test that values without a leading number are rejected."""
        assert style.parse_number("none") is None
        assert style.parse_number("") is None

    def test_parse_length_ignores_unit(self) -> None:
        """Test that units are stripped from lengths."""
        assert style.parse_length("0px") == 0.0
        assert style.parse_length("2.5mm") == 2.5


class TestMayContainText:
    """Tests for the text containment predicate."""

    def test_shapes_cannot_contain_text(self) -> None:
        """Test that leaf shapes never contain text."""
        for tag in ("rect", "circle", "path", "image", "stop"):
            assert not style.may_contain_text(ET.Element(tag))

    def test_text_elements_contain_text(self) -> None:
        """Test that text and unknown elements may contain text."""
        assert style.may_contain_text(ET.Element("text"))
        assert style.may_contain_text(ET.Element("svg"))

    def test_empty_group_cannot_contain_text(self) -> None:
        """Test that an empty group cannot contain text."""
        assert not style.may_contain_text(ET.Element("g"))

    def test_group_depends_on_descendants(self) -> None:
        """Test that a group may contain text only through its descendants."""
        shapes = ET.fromstring("<g><g><rect/></g><path/></g>")
        assert not style.may_contain_text(shapes)
        text = ET.fromstring("<g><g><rect/><text>Hi</text></g></g>")
        assert style.may_contain_text(text)

    def test_namespaced_tags(self) -> None:
        """Test that namespaced tags are matched by local name."""
        node = ET.fromstring('<rect xmlns="http://www.w3.org/2000/svg"/>')
        assert not style.may_contain_text(node)


class TestRepairStyle:
    """Tests for repair_style."""

    def repair(self, markup: str, style_to_attributes: bool = False) -> ET.Element:
        node = ET.fromstring(markup)
        style.repair_style(node, style_to_attributes=style_to_attributes)
        return node

    def test_paint_with_fallback_color(self) -> None:
        """Test that `url(#x) rgb(...)` is collapsed to `url(#x)`."""
        node = self.repair(
            '<rect style="fill:url(#test) rgb(0,0,0); stroke:url(#test) rgb(0,0,0);" />'
        )
        assert node.get("style") == "fill:url(#test);stroke:url(#test);"

    def test_quoted_paint_with_other_fallback_color(self) -> None:
        """Test that quoted urls with any trailing color are collapsed too."""
        node = self.repair("""<rect style="fill:url('#test') #ff0000" />""")
        assert node.get("style") == "fill:url('#test');"

    def test_paint_without_fallback_untouched(self) -> None:
        """Test that a plain url value is kept as is."""
        node = self.repair('<rect style="fill:url(#test)" />')
        assert node.get("style") == "fill:url(#test);"

    def test_zero_opacity_drops_paint(self) -> None:
        """Test that opacity:0 removes every fill and stroke property."""
        node = self.repair(
            '<rect style="opacity:0;fill:#0000ff;fill-rule:evenodd;stroke:#000000;'
            'stroke-linecap:butt;stroke-linejoin:miter;stroke-opacity:1" />'
        )
        assert node.get("style") == "opacity:0;"

    def test_nonzero_opacity_stops_normalization(self) -> None:
        """Test that a visible opacity leaves the style untouched."""
        node = self.repair(
            '<rect style="opacity:0.5;stroke:none;stroke-width:2;font-size:12px" />'
        )
        assert node.get("style") == "opacity:0.5;stroke:none;stroke-width:2;font-size:12px"

    def test_nonzero_opacity_keeps_paint_repair(self) -> None:
        """Test that the paint repair is still written with a visible opacity."""
        node = self.repair('<rect style="opacity:1;fill:url(#a) rgb(0, 0, 0)" />')
        assert node.get("style") == "opacity:1;fill:url(#a);"

    def test_stroke_none(self) -> None:
        """Test that stroke:none removes the other stroke properties."""
        node = self.repair(
            '<rect style="stroke:none;stroke-width:2;stroke-dasharray:1,2;fill:red" />'
        )
        assert node.get("style") == "stroke:none;fill:red;"

    def test_fill_none(self) -> None:
        """Test that fill:none removes the other fill properties."""
        node = self.repair('<rect style="fill:none;fill-rule:evenodd;fill-opacity:1" />')
        assert node.get("style") == "fill:none;"

    def test_zero_fill_opacity(self) -> None:
        """Test that fill-opacity:0 removes the other fill properties."""
        node = self.repair('<rect style="fill:red;fill-opacity:0.0;stroke:blue" />')
        assert node.get("style") == "fill-opacity:0.0;stroke:blue;"

    def test_zero_stroke_opacity(self) -> None:
        """Test that stroke-opacity:0 removes the other stroke properties."""
        node = self.repair('<rect style="stroke:blue;stroke-opacity:0;stroke-width:3" />')
        assert node.get("style") == "stroke-opacity:0;"

    def test_zero_stroke_width_with_unit(self) -> None:
        """Test that stroke-width:0px removes the other stroke properties."""
        node = self.repair('<rect style="stroke:blue;stroke-width:0px;fill:red" />')
        assert node.get("style") == "stroke-width:0px;fill:red;"

    def test_unparseable_numbers_are_not_zero(self) -> None:
        """Test that non-numeric opacities do not trigger removals."""
        node = self.repair('<rect style="fill:red;fill-opacity:inherit" />')
        assert node.get("style") == "fill:red;fill-opacity:inherit;"

    def test_text_properties_removed_from_shapes(self) -> None:
        """Test that font properties are dropped on non-text elements."""
        node = self.repair(
            '<rect style="fill:red;font-family:Sans;font-size:12px;text-anchor:end" />'
        )
        assert node.get("style") == "fill:red;"

    def test_text_properties_kept_on_text(self) -> None:
        """Test that font properties are kept on text elements."""
        node = self.repair('<text style="font-family:Sans;font-size:12px">Hi</text>')
        assert node.get("style") == "font-family:Sans;font-size:12px;"

    def test_text_properties_kept_on_group_with_text(self) -> None:
        """Test that font properties are kept on groups containing text."""
        node = self.repair('<g style="font-size:12px"><rect/><text>Hi</text></g>')
        assert node.get("style") == "font-size:12px;"

    def test_vendor_properties_removed(self) -> None:
        """Test that editor-specific properties are dropped."""
        node = self.repair(
            '<text style="-inkscape-font-specification:Sans Bold;font-weight:bold" />'
        )
        assert node.get("style") == "font-weight:bold;"

    def test_empty_result_removes_attribute(self) -> None:
        """Test that the style attribute is removed when nothing is left."""
        node = self.repair('<rect style="font-family:Sans" />')
        assert "style" not in node.attrib

    def test_malformed_style_untouched(self) -> None:
        """Test that a style without valid entries is left alone."""
        node = self.repair('<rect style="garbage" />')
        assert node.get("style") == "garbage"

    def test_style_to_attributes(self) -> None:
        """Test that presentation properties are promoted to attributes."""
        node = self.repair(
            '<rect fill="blue" style="fill:red;stroke:none;cursor:pointer" />',
            style_to_attributes=True,
        )
        assert node.get("fill") == "red"
        assert node.get("stroke") == "none"
        assert node.get("style") == "cursor:pointer;"

    def test_style_to_attributes_empties_style(self) -> None:
        """Test that a fully promoted style is removed."""
        node = self.repair(
            '<stop style="stop-color:#ff0000;stop-opacity:1" />',
            style_to_attributes=True,
        )
        assert node.get("stop-color") == "#ff0000"
        assert node.get("stop-opacity") == "1"
        assert "style" not in node.attrib


class TestRepairStyles:
    """Tests for repair_styles over a whole tree."""

    def test_repair_all_elements(self) -> None:
        """Test that every element with a style is normalized."""
        svg = ET.fromstring(
            '<svg><g style="fill:none;fill-rule:evenodd"><rect style="stroke:none;'
            'stroke-width:1"/></g><circle/></svg>'
        )
        style.repair_styles(svg, style_to_attributes=False)
        assert svg[0].get("style") == "fill:none;"
        assert svg[0][0].get("style") == "stroke:none;"
        assert "style" not in svg[1].attrib

    def test_repair_skips_comments(self) -> None:
        """Test that comment nodes are ignored."""
        svg = ET.fromstring(
            '<svg><rect style="fill:red"/></svg>',
            parser=ET.XMLParser(target=ET.TreeBuilder(insert_comments=True)),
        )
        svg.insert(0, ET.Comment("note"))
        style.repair_styles(svg)
        assert svg[1].get("fill") == "red"
