"""Tests for the edit plan and the small model containers."""

import pytest

from restyle.model.component import ComponentRecord, ComponentRegistry
from restyle.model.diagnostic import Diagnostic, Severity
from restyle.model.edits import EditConflictError, EditPlan, TextEdit
from restyle.model.span import Span
from restyle.model.usage import UsageState


class TestEditPlan:
    def test_replace_and_delete(self) -> None:
        plan = EditPlan()
        plan.replace(Span(0, 3), "let")
        plan.delete(Span(5, 7))
        assert plan.apply(b"var a = 1;") == b"let a 1;"

    def test_edits_applied_regardless_of_insertion_order(self) -> None:
        plan = EditPlan()
        plan.replace(Span(8, 9), "2")
        plan.replace(Span(4, 5), "b")
        assert plan.apply(b"var a = 1;") == b"var b = 2;"

    def test_same_position_insertions_keep_order(self) -> None:
        plan = EditPlan()
        plan.insert(0, "one ")
        plan.insert(0, "two ")
        assert plan.apply(b"x") == b"one two x"

    def test_insertion_order_hint(self) -> None:
        plan = EditPlan()
        plan.insert(0, "second\n")
        plan.insert(0, "first\n", order=-1)
        assert plan.apply(b"x") == b"first\nsecond\nx"

    def test_insert_next_to_deletion(self) -> None:
        plan = EditPlan()
        plan.delete(Span(0, 4))
        plan.insert(0, "new ")
        plan.insert(4, "!")
        assert plan.apply(b"old body") == b"new !body"

    def test_overlap_raises(self) -> None:
        plan = EditPlan()
        plan.delete(Span(2, 6))
        with pytest.raises(EditConflictError):
            plan.replace(Span(4, 8), "x")

    def test_insert_inside_deletion_raises(self) -> None:
        plan = EditPlan()
        plan.delete(Span(2, 6))
        with pytest.raises(EditConflictError):
            plan.insert(3, "x")

    def test_adjacent_edits_do_not_conflict(self) -> None:
        plan = EditPlan()
        plan.delete(Span(0, 2))
        plan.delete(Span(2, 4))
        assert plan.apply(b"abcdef") == b"ef"

    def test_multibyte_text(self) -> None:
        source = "é = 1;".encode("utf-8")
        plan = EditPlan()
        plan.replace(Span(0, 2), "ü")
        assert plan.apply(source).decode("utf-8") == "ü = 1;"

    def test_len_and_bool(self) -> None:
        plan = EditPlan()
        assert not plan
        plan.insert(0, "x")
        assert len(plan) == 1

    def test_text_edit_overlap_rules(self) -> None:
        assert TextEdit(0, 4).overlaps(TextEdit(3, 6))
        assert not TextEdit(0, 4).overlaps(TextEdit(4, 6))
        assert not TextEdit(4, 4, "x").overlaps(TextEdit(0, 4))


class TestComponentRegistry:
    def _record(self, name):
        return ComponentRecord(name=name, element_tag="div", is_intrinsic=True, css_text="")

    def test_insertion_order(self) -> None:
        registry = ComponentRegistry()
        registry.add(self._record("B"))
        registry.add(self._record("A"))
        assert registry.names() == ["B", "A"]
        assert [r.name for r in registry] == ["B", "A"]

    def test_duplicate_rejected(self) -> None:
        registry = ComponentRegistry()
        registry.add(self._record("A"))
        with pytest.raises(ValueError, match="Duplicate"):
            registry.add(self._record("A"))

    def test_lookup(self) -> None:
        registry = ComponentRegistry()
        assert not registry
        registry.add(self._record("A"))
        assert "A" in registry
        assert registry.get("A").element_tag == "div"
        assert registry.get("Z") is None
        assert len(registry) == 1


class TestSmallModels:
    def test_usage_keep(self) -> None:
        usage = UsageState()
        usage.keep("a", "b")
        usage.keep("a")
        assert usage.kept_names == {"a", "b"}
        assert not usage.preserve_wrapper
        assert not usage.preserve_all_styles

    def test_diagnostic_str(self) -> None:
        d = Diagnostic("unresolved-style", Severity.WARNING, "Cannot resolve `styles.x`", line=4)
        assert str(d) == "WARNING [line 4]: Cannot resolve `styles.x`"
        assert d.is_warning

    def test_info_is_not_warning(self) -> None:
        d = Diagnostic("non-declarative-table", Severity.INFO, "left alone")
        assert not d.is_warning
        assert str(d) == "INFO: left alone"

    def test_span_contains(self) -> None:
        assert Span(0, 10).contains(Span(2, 10))
        assert not Span(0, 10).contains(Span(5, 11))
