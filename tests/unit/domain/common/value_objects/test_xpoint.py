"""Tests for XPoint and PositionRange value objects."""

import pytest

from readmark.domain.common.value_objects.xpoint import (
    PositionRange,
    XPoint,
    normalize_xpath,
    parse_xpath_segments,
)
from readmark.exceptions import XPointParseError


class TestXPoint:
    """Test suite for XPoint parsing and operations."""

    def test_parse_simple_xpoint(self) -> None:
        """Parse xpoint without DocFragment."""
        result = XPoint.parse("/body/div[1]/p[5]/text()[1].42")

        assert result.doc_fragment_index is None
        assert result.section_index == 1
        assert result.xpath == "/body/div[1]/p[5]"
        assert result.text_node_index == 1
        assert result.char_offset == 42
        assert result.has_text_node

    def test_parse_xpoint_with_doc_fragment(self) -> None:
        result = XPoint.parse("/body/DocFragment[12]/body/div/p[88]/text().223")

        assert result.doc_fragment_index == 12
        assert result.section_index == 12
        assert result.xpath == "/body/div/p[88]"
        assert result.text_node_index == 1  # Default when not specified
        assert result.char_offset == 223

    def test_parse_xpoint_with_explicit_text_node_index(self) -> None:
        result = XPoint.parse("/body/div/p/text()[3].100")

        assert result.xpath == "/body/div/p"
        assert result.text_node_index == 3
        assert result.char_offset == 100

    def test_parse_element_boundary_without_text(self) -> None:
        """Parse xpoint pointing to element boundary (no /text().offset)."""
        result = XPoint.parse("/body/DocFragment[14]/body/a")

        assert result.doc_fragment_index == 14
        assert result.xpath == "/body/a"
        assert result.text_node_index == 1
        assert result.char_offset == 0
        assert not result.has_text_node

    def test_parse_image_element_with_offset(self) -> None:
        result = XPoint.parse("/body/DocFragment[20]/body/div/p[1]/img.0")

        assert result.xpath == "/body/div/p[1]/img"
        assert result.char_offset == 0
        assert not result.has_text_node

    @pytest.mark.parametrize(
        "xpoint",
        [
            "",
            "not an xpoint",
            "/body/p/text()",
            "/div/p/text().1",
            "/body/div p/text().1",
            "/body/p/text().1.2",
            "/body/p/text().-5",
        ],
    )
    def test_parse_invalid_xpoint(self, xpoint: str) -> None:
        with pytest.raises(XPointParseError):
            XPoint.parse(xpoint)

    def test_parse_invalid_doc_fragment_index_zero(self) -> None:
        with pytest.raises(XPointParseError, match="DocFragment"):
            XPoint.parse("/body/DocFragment[0]/body/p")

    def test_parse_invalid_text_node_index_zero(self) -> None:
        with pytest.raises(XPointParseError, match="text node"):
            XPoint.parse("/body/p/text()[0].5")

    def test_parse_preserves_xpoint_in_error(self) -> None:
        with pytest.raises(XPointParseError) as exc_info:
            XPoint.parse("garbage")

        assert exc_info.value.xpoint == "garbage"

    def test_parsed_xpoint_is_frozen(self) -> None:
        result = XPoint.parse("/body/p/text().1")

        with pytest.raises(AttributeError):
            result.char_offset = 5  # type: ignore[misc]

    @pytest.mark.parametrize(
        "xpoint",
        [
            "/body/DocFragment[12]/body/div/p[88]/text().223",
            "/body/DocFragment[14]/body/a",
            "/body/div/p/text()[3].100",
        ],
    )
    def test_to_string_keeps_token_form(self, xpoint: str) -> None:
        assert XPoint.parse(xpoint).to_string() == xpoint

    def test_to_dict_and_from_dict(self) -> None:
        original = XPoint.parse("/body/DocFragment[3]/body/p[2]/text()[2].7")

        restored = XPoint.from_dict(original.to_dict())

        assert restored.doc_fragment_index == 3
        assert restored.xpath == "/body/p[2]"
        assert restored.text_node_index == 2
        assert restored.char_offset == 7


class TestXPathHelpers:
    def test_parse_xpath_segments_defaults_index_to_one(self) -> None:
        assert parse_xpath_segments("/body/div[2]/p") == [("body", 1), ("div", 2), ("p", 1)]

    def test_normalize_xpath_adds_explicit_indices(self) -> None:
        assert normalize_xpath("/body/p/span[2]") == "/body[1]/p[1]/span[2]"

    def test_normalize_xpath_treats_omitted_and_explicit_first_index_alike(self) -> None:
        assert normalize_xpath("/body/div[1]/p") == normalize_xpath("/body/div/p[1]")


class TestXPointComparison:
    """Structural ordering of xpoints."""

    def test_compare_identical_xpoints(self) -> None:
        xp = XPoint.parse("/body/DocFragment[1]/body/p[3]/text().5")
        assert xp.compare_to(XPoint.parse("/body/DocFragment[1]/body/p[3]/text().5")) == 0

    def test_compare_different_doc_fragments(self) -> None:
        first = XPoint.parse("/body/DocFragment[1]/body/p[30]/text().0")
        second = XPoint.parse("/body/DocFragment[2]/body/p[1]/text().0")

        assert first.compare_to(second) == -1
        assert second.compare_to(first) == 1

    def test_compare_without_doc_fragment_counts_as_first_section(self) -> None:
        first = XPoint.parse("/body/p[5]/text().0")
        second = XPoint.parse("/body/DocFragment[2]/body/p[1]/text().0")

        assert first.compare_to(second) == -1

    def test_compare_avoids_lexicographic_trap(self) -> None:
        """p[9] comes before p[10] even though "10" < "9" as strings."""
        first = XPoint.parse("/body/p[9]/text().0")
        second = XPoint.parse("/body/p[10]/text().0")

        assert first.compare_to(second) == -1

    def test_compare_different_text_node_indices(self) -> None:
        first = XPoint.parse("/body/p/text()[1].50")
        second = XPoint.parse("/body/p/text()[2].0")

        assert first.compare_to(second) == -1

    def test_compare_different_char_offsets(self) -> None:
        first = XPoint.parse("/body/p/text().10")
        second = XPoint.parse("/body/p/text().3")

        assert first.compare_to(second) == 1

    def test_compare_parent_before_descendant(self) -> None:
        parent = XPoint.parse("/body/div[2]")
        child = XPoint.parse("/body/div[2]/p[1]/text().0")

        assert parent.compare_to(child) == -1


class TestPositionRange:
    def test_range_keeps_token_strings(self) -> None:
        position_range = PositionRange(
            start="/body/DocFragment[2]/body/p[1]/text().4",
            end="/body/DocFragment[2]/body/p[3]/text().9",
        )

        assert position_range.start == "/body/DocFragment[2]/body/p[1]/text().4"
        assert position_range.section_index == 2

    def test_range_rejects_unparseable_tokens(self) -> None:
        with pytest.raises(XPointParseError):
            PositionRange(start="nope", end="/body/p/text().1")

    def test_range_rejects_start_in_later_section(self) -> None:
        with pytest.raises(ValueError, match="before end"):
            PositionRange(
                start="/body/DocFragment[3]/body/p/text().0",
                end="/body/DocFragment[2]/body/p/text().0",
            )

    def test_range_rejects_start_offset_after_end_in_same_node(self) -> None:
        with pytest.raises(ValueError, match="offset"):
            PositionRange(start="/body/p/text().9", end="/body/p/text().2")

    def test_range_rejects_start_text_node_after_end(self) -> None:
        with pytest.raises(ValueError, match="text node"):
            PositionRange(start="/body/p/text()[2].0", end="/body/p/text()[1].5")

    def test_contains_is_inclusive(self) -> None:
        position_range = PositionRange(start="/body/p[2]/text().0", end="/body/p[4]/text().10")

        assert position_range.contains("/body/p[2]/text().0")
        assert position_range.contains("/body/p[3]/text().5")
        assert position_range.contains("/body/p[4]/text().10")
        assert not position_range.contains("/body/p[1]/text().0")
        assert not position_range.contains("/body/p[4]/text().11")

    def test_to_dict_and_from_dict(self) -> None:
        original = PositionRange(start="/body/p/text().1", end="/body/p/text().8")

        assert PositionRange.from_dict(original.to_dict()) == original
