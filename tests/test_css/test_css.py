"""Tests for style value extraction and CSS rendering."""

import pytest

from restyle.css import component_css, dashify, to_css
from restyle.css.values import escape_template, is_constant, is_declarative, style_value
from restyle.parser import build_expr, iter_nodes, parse_module


def _expr(code: str):
    module = parse_module(f"const x = {code};")
    declarator = next(iter_nodes(module.root, ("variable_declarator",)))
    return build_expr(declarator.child_by_field_name("value"), module.source)


# ---------------------------------------------------------------------------
# dashify
# ---------------------------------------------------------------------------


class TestDashify:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("color", "color"),
            ("backgroundColor", "background-color"),
            ("borderTopLeftRadius", "border-top-left-radius"),
            ("WebkitTransition", "-webkit-transition"),
            ("msTransform", "-ms-transform"),
            ("--main-color", "--main-color"),
            ("font-size", "font-size"),
        ],
    )
    def test_keys(self, key, expected) -> None:
        assert dashify(key) == expected


# ---------------------------------------------------------------------------
# to_css
# ---------------------------------------------------------------------------


class TestToCss:
    def test_units(self) -> None:
        css = to_css({"fontSize": 12, "lineHeight": 1.5, "margin": 0, "zIndex": 3})
        assert css == "font-size: 12px;\nline-height: 1.5;\nmargin: 0;\nz-index: 3;"

    def test_integral_float(self) -> None:
        assert to_css({"width": 10.0}) == "width: 10px;"

    def test_negative_number(self) -> None:
        assert to_css({"marginTop": -3}) == "margin-top: -3px;"

    def test_strings_verbatim(self) -> None:
        assert to_css({"border": "1px solid #ccc"}) == "border: 1px solid #ccc;"

    def test_null_and_false_dropped(self) -> None:
        assert to_css({"color": None, "display": False}) == ""

    def test_fallback_list(self) -> None:
        css = to_css({"display": ["-webkit-flex", "flex"]})
        assert css == "display: -webkit-flex;\ndisplay: flex;"

    def test_pseudo_selector(self) -> None:
        css = to_css({"color": "blue", ":hover": {"color": "red"}})
        assert css == "color: blue;\n&:hover {\n  color: red;\n}"

    def test_media_query(self) -> None:
        css = to_css({"@media (max-width: 600px)": {"display": "none"}})
        assert css == "@media (max-width: 600px) {\n  display: none;\n}"

    def test_depth(self) -> None:
        assert to_css({"color": "red"}, depth=2) == "    color: red;"

    def test_interpolation_kept(self) -> None:
        assert to_css({"color": "${theme.fg}"}) == "color: ${theme.fg};"


class TestComponentCss:
    def test_merges_in_order(self) -> None:
        css = component_css([{"color": "red"}, {"margin": 4}], "div")
        assert css == "\n  color: red;\n  margin: 4px;\n"

    def test_later_styles_follow_earlier(self) -> None:
        css = component_css([{"color": "red"}, {"color": "blue"}], "span")
        assert css == "\n  color: red;\n  color: blue;\n"

    def test_specificity_wrapper(self) -> None:
        css = component_css([{"padding": 4}], "button")
        assert css == "\n  &&& {\n    padding: 4px;\n  }\n"

    def test_specificity_tags_configurable(self) -> None:
        assert component_css([{"padding": 4}], "button", ()) == "\n  padding: 4px;\n"

    def test_empty(self) -> None:
        assert component_css([{}], "div") == ""
        assert component_css([{"color": None}], "button") == ""


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class TestIsConstant:
    @pytest.mark.parametrize(
        "code",
        [
            '"red"',
            "12",
            "-4",
            "null",
            "{a: 1, 'b-c': 'x', d: [1, 2], e: {f: -1}}",
            "`${1}px`",
        ],
    )
    def test_constant(self, code) -> None:
        assert is_constant(_expr(code))

    @pytest.mark.parametrize(
        "code",
        ["a", "{a: b}", "{[k]: 1}", "{...x}", "`${a}px`", "-a", "f()", "{m() {}}"],
    )
    def test_not_constant(self, code) -> None:
        assert not is_constant(_expr(code))


class TestIsDeclarative:
    def test_plain_object(self) -> None:
        assert is_declarative(_expr("{color: theme.fg, ':hover': {opacity: 0.5}}"))

    def test_nested_spread(self) -> None:
        assert not is_declarative(_expr("{':hover': {...hover}}"))

    def test_not_an_object(self) -> None:
        assert not is_declarative(_expr("makeStyle()"))


class TestStyleValue:
    def test_object(self) -> None:
        value = style_value(_expr("{color: 'red', size: 2, bold: true, gone: null}"))
        assert value == {"color": "red", "size": 2, "bold": True, "gone": None}

    def test_negative(self) -> None:
        assert style_value(_expr("{top: -2}")) == {"top": -2}

    def test_list(self) -> None:
        assert style_value(_expr("['a', 1]")) == ["a", 1]

    def test_non_literal_becomes_interpolation(self) -> None:
        assert style_value(_expr("{color: theme.primary}")) == {"color": "${theme.primary}"}

    def test_template(self) -> None:
        assert style_value(_expr("`${size}px solid`")) == "${size}px solid"

    def test_backtick_escaped(self) -> None:
        assert style_value(_expr("'a`b'")) == "a\\`b"


class TestEscapeTemplate:
    def test_interpolation_marker(self) -> None:
        assert escape_template("${x}") == "\\${x}"

    def test_lone_dollar(self) -> None:
        assert escape_template("$5") == "$5"

    def test_existing_escapes_kept(self) -> None:
        assert escape_template("a\\'b") == "a\\'b"
