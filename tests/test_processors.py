# test_processors.py

import pytest
from unittest.mock import Mock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from prismline.style.colors import Color
from prismline.style.definitions import EngineDefinitions
from prismline.style.encoders import SectionEncoder
from prismline.style.processors import (
    LegacyCanonicalizer,
    LegacyCodes,
    MultiStopGradient,
    PairedGradient,
    PatternProcessor,
    Rainbow,
    SolidColor,
    paint,
    tokenize,
    visible_text,
)

RED_ANSI = "\x1b[38;2;255;0;0m"
GREEN_ANSI = "\x1b[38;2;0;255;0m"
BLUE_ANSI = "\x1b[38;2;0;0;255m"
WHITE_ANSI = "\x1b[38;2;255;255;255m"

RED_SECTION = "§x§f§f§0§0§0§0"
BLUE_SECTION = "§x§0§0§0§0§f§f"


class TestFormatTokens:
    def test_tokenize_marks_format_codes(self):
        assert tokenize("a&lb") == [(False, "a"), (True, "&l"), (False, "b")]

    def test_color_and_format_codes_are_zero_width(self):
        assert visible_text("&ca&lb§oc") == "abc"

    def test_tokenize_keeps_color_codes_whole(self):
        assert tokenize("&ab") == [(True, "&a"), (False, "b")]

    def test_paint_drops_palette_codes(self):
        definitions = EngineDefinitions(encoder=SectionEncoder())
        red = Color(255, 0, 0)
        assert paint("&a&lab", [red, red], definitions, True) == (
            RED_SECTION + "&la" + RED_SECTION + "&lb"
        )

    def test_paint_repeats_format_codes_after_each_color(self):
        definitions = EngineDefinitions(encoder=SectionEncoder())
        red = Color(255, 0, 0)
        assert paint("&lab", [red, red], definitions, True) == (
            RED_SECTION + "&la" + RED_SECTION + "&lb"
        )

    def test_reset_clears_format_codes(self):
        definitions = EngineDefinitions(encoder=SectionEncoder())
        red = Color(255, 0, 0)
        assert paint("&la&rb", [red, red], definitions, True) == (
            RED_SECTION + "&la" + RED_SECTION + "b"
        )


class TestPatternProcessor:
    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            PatternProcessor(EngineDefinitions())


class TestLegacyCanonicalizer:
    def setup_method(self):
        self.processor = LegacyCanonicalizer(EngineDefinitions())

    @pytest.mark.parametrize("legacy", ["{#ff0000}", "[#ff0000]", "%#ff0000%", "&#ff0000", "&xff0000"])
    def test_solid_spellings(self, legacy):
        assert self.processor.canonicalize(legacy + "Hi") == "#ff0000Hi"

    def test_legacy_gradient(self):
        assert self.processor.canonicalize("<G:ff0000>Hi</G:0000ff>") == "<#ff0000>Hi</#0000ff>"

    def test_legacy_gradient_waypoints(self):
        text = "<g:ff0000>ab<g:00ff00>cd</g:0000ff>"
        assert self.processor.canonicalize(text) == "<#ff0000>ab<#00ff00>cd</#0000ff>"

    def test_rainbow_spellings(self):
        assert self.processor.canonicalize("<rainbow:50>Hi</rainbow>") == "<R:50>Hi</R>"
        assert self.processor.canonicalize("<r:20>Hi</r>") == "<R:20>Hi</R>"
        assert self.processor.canonicalize("<rainbow>Hi</rainbow>") == "<R>Hi</R>"

    def test_malformed_legacy_spelling_is_untouched(self):
        assert self.processor.canonicalize("{#zz0000}Hi") == "{#zz0000}Hi"

    def test_strip_mode_canonicalizes_too(self):
        assert self.processor.strip("[#abcdef]") == "#abcdef"


class TestMultiStopGradient:
    def setup_method(self):
        self.processor = MultiStopGradient(EngineDefinitions())

    def test_two_stops_color_each_character(self):
        assert self.processor.parse("<#ff0000:#0000ff>Hi</g>") == RED_ANSI + "H" + BLUE_ANSI + "i"

    def test_long_closing_tag(self):
        assert self.processor.parse("<#ff0000:#0000ff>Hi</gradient>") == RED_ANSI + "H" + BLUE_ANSI + "i"

    def test_three_stops_keep_joining_edge(self):
        stops = [Color(255, 0, 0), Color(0, 255, 0), Color(0, 0, 255)]
        assert MultiStopGradient.stop_colors(stops, "abcd") == [
            Color(255, 0, 0),
            Color(0, 255, 0),
            Color(0, 127, 127),
            Color(0, 0, 255),
        ]

    def test_text_shorter_than_segments(self):
        stops = [Color(255, 0, 0), Color(0, 255, 0), Color(0, 0, 255), Color(255, 255, 255)]
        assert len(MultiStopGradient.stop_colors(stops, "ab")) == 2

    def test_malformed_stop_leaves_match(self):
        text = "<#zz0000:#0000ff>Hi</g> <#ff0000:#0000ff>Hi</g>"
        assert self.processor.parse(text) == "<#zz0000:#0000ff>Hi</g> " + RED_ANSI + "H" + BLUE_ANSI + "i"

    def test_short_stop_never_opens_a_match(self):
        assert self.processor.parse("<#zz:#ff0000>x</g>") == "<#zz:#ff0000>x</g>"

    def test_legacy_color_code_inside_gradient(self):
        assert self.processor.parse("<#ff0000:#0000ff>&aHi</g>") == RED_ANSI + "H" + BLUE_ANSI + "i"

    def test_strip_keeps_inner_text(self):
        assert self.processor.strip("a<#ff0000:#00ff00:#0000ff>Hello</g>b") == "aHellob"

    def test_legacy_palette(self):
        assert self.processor.parse("<#ff0000:#0000ff>Hi</g>", False) == "\x1b[31mH\x1b[34mi"


class TestPairedGradient:
    def setup_method(self):
        self.processor = PairedGradient(EngineDefinitions())

    def test_two_stops(self):
        assert self.processor.parse("<#ff0000>ab</#0000ff>") == RED_ANSI + "a" + BLUE_ANSI + "b"

    def test_waypoints_start_new_sections(self):
        text = "<#ff0000>ab<#00ff00>cd</#0000ff>"
        assert self.processor.parse(text) == (
            RED_ANSI + "a" + GREEN_ANSI + "b" + GREEN_ANSI + "c" + BLUE_ANSI + "d"
        )

    def test_malformed_tag_does_not_swallow_next_gradient(self):
        text = "<#zz>x <#ff0000>ab</#0000ff>"
        assert self.processor.parse(text) == "<#zz>x " + RED_ANSI + "a" + BLUE_ANSI + "b"

    def test_strip_drops_waypoints(self):
        assert self.processor.strip("<#ff0000>ab<#00ff00>cd</#0000ff>!") == "abcd!"


class TestRainbow:
    def setup_method(self):
        self.processor = Rainbow(EngineDefinitions())

    def test_zero_saturation(self):
        assert self.processor.parse("<R:0>ab</R>") == WHITE_ANSI + "a" + WHITE_ANSI + "b"

    def test_default_saturation(self):
        assert self.processor.parse("<R>a</R>") == RED_ANSI + "a"

    def test_saturation_over_hundred_is_left_alone(self):
        logger = Mock()
        processor = Rainbow(EngineDefinitions(), logger)
        assert processor.parse("<R:150>ab</R>") == "<R:150>ab</R>"
        logger.debug.assert_called_once()

    def test_strip(self):
        assert self.processor.strip("<R:50>Hi</R>") == "Hi"


class TestSolidColor:
    def setup_method(self):
        self.processor = SolidColor(EngineDefinitions())

    def test_bare_and_angle_spellings(self):
        assert self.processor.parse("#ff0000a<#00ff00>b") == RED_ANSI + "a" + GREEN_ANSI + "b"

    def test_closing_gradient_tag_is_not_a_color(self):
        assert self.processor.parse("x</#00ff00>") == "x</#00ff00>"

    def test_malformed_hex_is_untouched(self):
        assert self.processor.parse("#zz0000Text") == "#zz0000Text"

    def test_strip_removes_markup(self):
        assert self.processor.strip("#ff0000Hello") == "Hello"

    def test_strip_repeats_until_stable(self):
        assert self.processor.strip("##ff0000ff0000x") == "x"

    def test_section_encoder(self):
        processor = SolidColor(EngineDefinitions(encoder=SectionEncoder()))
        assert processor.parse("#ff0000Hi") == RED_SECTION + "Hi"
        assert processor.parse("#ff0000Hi", False) == "§4Hi"


class TestLegacyCodes:
    def setup_method(self):
        self.processor = LegacyCodes(EngineDefinitions())

    def test_palette_and_format_codes(self):
        assert self.processor.parse("&cRed &lbold&r") == "\x1b[91mRed \x1b[1mbold\x1b[0m"

    def test_strip_both_prefixes(self):
        assert self.processor.strip("&cRed §lbold") == "Red bold"

    def test_missing_palette_code_is_untouched(self):
        processor = LegacyCodes(EngineDefinitions(palette=()))
        assert processor.parse("&cHi") == "&cHi"
