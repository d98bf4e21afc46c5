"""Tests for style reference resolution on individual elements."""

from restyle.analysis.resolver import StyleReferenceResolver
from restyle.analysis.scanner import scan_usage
from restyle.config import TransformConfig
from restyle.events import ComponentSynthesized, EventBus, StyleUnresolved
from restyle.model.component import ComponentRegistry
from restyle.model.edits import EditPlan
from restyle.parser import collect_bindings, find_style_table, parse_module
from restyle.transforms.synthesizer import ComponentSynthesizer

TABLE = """\
const styles = {
  header: { color: "red" },
  body: { margin: 0, padding: 8 },
  empty: {},
  dyn: makeStyle(),
};
"""


class Resolution:
    """Runs the scan and resolve phases, without the module-level rewrite."""

    def __init__(self, source: str, config: TransformConfig | None = None, bus=None) -> None:
        config = config or TransformConfig()
        module = parse_module(source)
        table = find_style_table(module, config.table_identifier, config.identity_helper)
        self.usage = scan_usage(module, table, config)
        self.registry = ComponentRegistry()
        plan = EditPlan()
        synthesizer = ComponentSynthesizer(self.registry, collect_bindings(module), plan, config)
        resolver = StyleReferenceResolver(module, table, self.usage, synthesizer, plan, config, bus)
        self.diagnostics = resolver.resolve()
        self.output = plan.apply(module.source).decode("utf-8")


def _resolve(jsx: str, **kwargs) -> Resolution:
    return Resolution(TABLE + f"const A = (props) => {jsx};\n", **kwargs)


# ---------------------------------------------------------------------------
# Table shapes
# ---------------------------------------------------------------------------


class TestTableShapes:
    def test_direct(self) -> None:
        r = _resolve("<div style={styles.header}>Hi</div>")
        assert r.registry.names() == ["HeaderDiv"]
        assert r.registry.get("HeaderDiv").css_text == "\n  color: red;\n"
        assert "<HeaderDiv>Hi</HeaderDiv>" in r.output
        assert r.diagnostics == []

    def test_merge_array_joins_names(self) -> None:
        r = _resolve("<section style={[styles.header, styles.body]} />")
        record = r.registry.get("HeaderBodySection")
        assert record is not None
        assert record.css_text == "\n  color: red;\n  margin: 0;\n  padding: 8px;\n"
        assert "<HeaderBodySection />" in r.output

    def test_merge_object_all(self) -> None:
        r = _resolve("<div style={{ ...styles.body }} />")
        assert r.registry.names() == ["BodyDiv"]
        assert "<BodyDiv />" in r.output

    def test_merge_object_joins_names(self) -> None:
        r = _resolve("<div style={{ ...styles.header, ...styles.body }} />")
        assert r.registry.names() == ["HeaderBodyDiv"]
        css = r.registry.get("HeaderBodyDiv").css_text
        assert css == "\n  color: red;\n  margin: 0;\n  padding: 8px;\n"
        assert "<HeaderBodyDiv />" in r.output

    def test_merge_object_remainder_properties(self) -> None:
        r = _resolve('<div style={{ ...styles.header, color: "blue" }} />')
        assert '<HeaderDiv style={{ color: "blue" }} />' in r.output

    def test_merge_object_lone_spread_remainder(self) -> None:
        r = _resolve("<div style={{ ...styles.header, ...props.style }} />")
        assert "<HeaderDiv style={props.style} />" in r.output

    def test_custom_component(self) -> None:
        r = _resolve("<Card style={styles.body} />")
        record = r.registry.get("BodyCard")
        assert record.is_intrinsic is False
        assert record.element_tag == "Card"

    def test_member_expression_tag(self) -> None:
        r = _resolve("<UI.Panel style={styles.body}>x</UI.Panel>")
        assert "<BodyUIPanel>x</BodyUIPanel>" in r.output

    def test_empty_merges_are_dropped(self) -> None:
        r = _resolve("<div><p style={{}} /><b style={[]} /></div>")
        assert "<p />" in r.output
        assert "<b />" in r.output
        assert len(r.registry) == 0


# ---------------------------------------------------------------------------
# Elements left alone
# ---------------------------------------------------------------------------


class TestLeftAlone:
    def test_sentinel_component(self) -> None:
        r = _resolve("<ReactModal style={styles.header} />")
        assert len(r.registry) == 0
        assert r.usage.kept_names == {"header"}
        assert not r.usage.preserve_wrapper
        assert "<ReactModal style={styles.header} />" in r.output

    def test_namespaced_tag(self) -> None:
        r = _resolve("<svg:rect style={styles.header} />")
        assert len(r.registry) == 0
        assert r.usage.kept_names == {"header"}
        assert r.usage.preserve_wrapper

    def test_opaque_expression(self) -> None:
        r = _resolve("<div style={props.style} />")
        assert len(r.registry) == 0
        assert "<div style={props.style} />" in r.output

    def test_no_table(self) -> None:
        r = Resolution("const A = () => <div style={styles.header} />;\n")
        assert len(r.registry) == 0
        assert r.usage.kept_names == {"header"}
        assert r.usage.preserve_wrapper

    def test_unparsed_table(self) -> None:
        r = Resolution(
            "const styles = makeStyles();\nconst A = () => <div style={styles.header} />;\n"
        )
        assert len(r.registry) == 0
        assert r.usage.preserve_all_styles


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class TestWarnings:
    def test_missing_entry(self) -> None:
        r = _resolve("<div style={styles.missing} />")
        assert len(r.diagnostics) == 1
        d = r.diagnostics[0]
        assert d.code == "unresolved-style"
        assert d.message == "Cannot resolve `styles.missing`"
        assert d.line == 7
        assert d.style_name == "missing"
        assert len(r.registry) == 0
        assert r.usage.kept_names == {"missing"}
        assert r.usage.preserve_wrapper

    def test_non_declarative_entry(self) -> None:
        r = _resolve("<div style={styles.dyn} />")
        assert [d.message for d in r.diagnostics] == ["Cannot resolve `styles.dyn`"]

    def test_empty_entry(self) -> None:
        r = _resolve("<div style={styles.empty} />")
        assert [d.code for d in r.diagnostics] == ["empty-style"]
        assert r.diagnostics[0].message == "styles.empty is empty"

    def test_single_warning_per_attribute(self) -> None:
        r = _resolve("<div style={[styles.nope, styles.missing]} />")
        assert [d.style_name for d in r.diagnostics] == ["nope"]
        assert r.usage.kept_names == {"nope", "missing"}

    def test_warning_is_logged(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="restyle"):
            _resolve("<div style={styles.missing} />")
        assert "Cannot resolve `styles.missing`" in caplog.text


# ---------------------------------------------------------------------------
# Inline literals
# ---------------------------------------------------------------------------


class TestInlineLiterals:
    def test_literal_on_intrinsic(self) -> None:
        r = _resolve("<p style={{ marginTop: 10 }}>x</p>")
        assert r.registry.names() == ["StyledParagraph"]
        assert r.registry.get("StyledParagraph").css_text == "\n  margin-top: 10px;\n"
        assert "<StyledParagraph>x</StyledParagraph>" in r.output

    def test_literal_without_declarations(self) -> None:
        r = _resolve("<p style={{ color: null }}>x</p>")
        assert len(r.registry) == 0
        assert "<p>x</p>" in r.output

    def test_literal_on_component(self) -> None:
        r = _resolve('<Card style={{ color: "red" }} />')
        assert len(r.registry) == 0

    def test_disabled(self) -> None:
        r = _resolve('<p style={{ color: "red" }} />', config=TransformConfig(convert_inline_literals=False))
        assert len(r.registry) == 0


class TestEvents:
    def test_events_emitted(self) -> None:
        bus = EventBus()
        seen = []
        bus.on_all(seen.append)
        _resolve("<div><i style={styles.header} /><b style={styles.missing} /></div>", bus=bus)
        assert seen == [
            ComponentSynthesized("HeaderElt", "i", ("header",)),
            StyleUnresolved("missing", "Cannot resolve `styles.missing`", 7),
        ]
