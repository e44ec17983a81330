"""Tests for screenplay data models."""

import dataclasses

import pytest

from slugline.parser.location import Lighting
from slugline.parser.models import Element, ElementType, Screenplay, TitlePageEntry


class TestElementType:
    """Test the element kind enumeration."""

    def test_closed_set(self):
        """Test that exactly twelve kinds exist."""
        assert len(ElementType) == 12

    def test_str_is_value(self):
        """Test the display form of a kind."""
        assert str(ElementType.SCENE_HEADING) == "Scene Heading"
        assert ElementType("Page Break") is ElementType.PAGE_BREAK


class TestElement:
    """Test element construction and derived fields."""

    def test_scene_heading_location(self):
        """Test that headings compute their location from text."""
        element = Element(ElementType.SCENE_HEADING, "EXT. PARK - BENCH - DAY")
        assert element.lighting is Lighting.EXTERIOR
        assert element.place == "PARK"
        assert element.sub_place == "BENCH"
        assert element.time_of_day == "DAY"
        assert element.modifiers == ()

    def test_other_kinds_have_no_location(self):
        """Test that location fields are empty for non-headings."""
        element = Element(ElementType.ACTION, "INT. NOT A HEADING")
        assert element.location is None
        assert element.lighting is None
        assert element.place is None
        assert element.modifiers == ()

    def test_location_refreshed_on_replace(self):
        """Test that editing heading text re-derives the location."""
        element = Element(ElementType.SCENE_HEADING, "INT. ROOM - DAY")
        edited = dataclasses.replace(element, text="EXT. YARD - NIGHT")
        assert edited.place == "YARD"
        assert edited.lighting is Lighting.EXTERIOR

    def test_location_dropped_on_kind_change(self):
        """Test that turning a heading into action clears its location."""
        element = Element(ElementType.SCENE_HEADING, "INT. ROOM - DAY")
        edited = dataclasses.replace(element, element_type=ElementType.ACTION)
        assert edited.location is None

    def test_centered_flag_follows_kind(self):
        """Test that centered elements always carry the flag."""
        assert Element(ElementType.CENTERED, "THE END").is_centered

    def test_negative_depth_rejected(self):
        """Test that section depth cannot be negative."""
        with pytest.raises(ValueError, match="section_depth"):
            Element(ElementType.SECTION_HEADING, "Act", section_depth=-1)

    def test_immutable(self):
        """Test that elements cannot be modified in place."""
        element = Element(ElementType.ACTION, "text")
        with pytest.raises(dataclasses.FrozenInstanceError):
            element.text = "other"  # type: ignore[misc]

    def test_equality_ignores_location_cache(self):
        """Test that two headings with the same text are equal."""
        assert Element(ElementType.SCENE_HEADING, "INT. A - DAY") == Element(
            ElementType.SCENE_HEADING, "INT. A - DAY"
        )

    def test_content_key(self):
        """Test the fields compared after a write and re-parse."""
        element = Element(
            ElementType.SECTION_HEADING, "Act", section_depth=2, scene_number="4"
        )
        assert element.content_key == (
            ElementType.SECTION_HEADING,
            "Act",
            False,
            False,
            2,
        )

    def test_to_dict(self):
        """Test the JSON form of a numbered heading."""
        element = Element(
            ElementType.SCENE_HEADING, "INT. CAR - DAY (1995)", scene_number="7"
        )
        assert element.to_dict() == {
            "type": "Scene Heading",
            "text": "INT. CAR - DAY (1995)",
            "scene_number": "7",
            "location": {
                "lighting": "interior",
                "place": "CAR",
                "sub_place": None,
                "time_of_day": "DAY",
                "modifiers": ["1995"],
            },
        }

    def test_to_dict_flags(self):
        """Test that set flags appear in the JSON form."""
        data = Element(ElementType.DIALOGUE, "Hi", is_dual_dialogue=True).to_dict()
        assert data == {"type": "Dialogue", "text": "Hi", "dual_dialogue": True}


class TestScreenplay:
    """Test the screenplay value."""

    def test_lists_become_tuples(self):
        """Test that element and title page lists are frozen."""
        screenplay = Screenplay(
            elements=[Element(ElementType.ACTION, "a")],
            title_page=[TitlePageEntry("Title", ["Foo"])],
        )
        assert isinstance(screenplay.elements, tuple)
        assert isinstance(screenplay.title_page, tuple)
        assert screenplay.title_page[0].values == ("Foo",)

    def test_with_elements(self):
        """Test deriving an edited copy."""
        original = Screenplay(
            filename="a.fountain",
            title_page=(TitlePageEntry("Title", ("Foo",)),),
            suppress_scene_numbers=True,
        )
        edited = original.with_elements([Element(ElementType.ACTION, "new")])
        assert original.elements == ()
        assert edited.elements[0].text == "new"
        assert edited.filename == "a.fountain"
        assert edited.title == "Foo"
        assert edited.suppress_scene_numbers is True

    def test_title_joins_lines(self):
        """Test a title written over several lines."""
        screenplay = Screenplay(title_page=(TitlePageEntry("Title", ("Big", "Fish")),))
        assert screenplay.title == "Big Fish"

    def test_missing_title(self):
        """Test screenplays without a title entry."""
        assert Screenplay().title is None
        assert Screenplay().title_values("authors") == ()

    def test_scene_headings(self):
        """Test listing scene heading elements."""
        screenplay = Screenplay.from_string(
            "INT. A - DAY\n\nAction.\n\nEXT. B - NIGHT\n"
        )
        assert [e.place for e in screenplay.scene_headings] == ["A", "B"]

    def test_from_file(self, brick_and_steel):
        """Test the file constructor."""
        screenplay = Screenplay.from_file(brick_and_steel)
        assert screenplay.filename == "brick_and_steel.fountain"
        assert len(screenplay.scene_headings) == 3

    def test_outline_and_markup(self):
        """Test the convenience wrappers around the outline and writer."""
        screenplay = Screenplay.from_string("## Act\n\nINT. A - DAY\n")
        assert screenplay.outline().children[0].title == "Act"
        assert screenplay.to_markup() == "## Act\n\nINT. A - DAY #1#\n"
        assert (
            screenplay.to_markup(suppress_scene_numbers=True)
            == "## Act\n\nINT. A - DAY\n"
        )
