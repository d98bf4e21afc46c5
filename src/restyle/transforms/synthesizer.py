"""Component synthesis: naming, registry bookkeeping and element renames."""

from __future__ import annotations

import logging
import re
from typing import Callable, Sequence

from restyle.analysis.elements import Element
from restyle.config import TransformConfig
from restyle.model.component import ComponentRecord, ComponentRegistry
from restyle.model.edits import EditPlan
from restyle.model.span import Span

logger = logging.getLogger("restyle")

# Readable suffixes for tags whose own name makes a poor one.
TAG_SUFFIXES: dict[str, str] = {
    "a": "Link",
    "b": "Elt",
    "em": "Elt",
    "h1": "Heading",
    "h2": "Heading",
    "h3": "Heading",
    "h4": "Heading",
    "h5": "Heading",
    "i": "Elt",
    "li": "ListItem",
    "ol": "List",
    "p": "Paragraph",
    "td": "Cell",
    "th": "Heading",
    "tr": "Row",
    "ul": "List",
}

_STRIP_RE = re.compile(r"//.*|[^A-Za-z0-9]+")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def join_style_names(names: Sequence[str]) -> str:
    """``["header", "active"]`` -> ``"HeaderActive"``."""
    return "".join(upper_first(name) for name in names)


def generate_component_name(
    style_name: str | None, tag: str, is_taken: Callable[[str], bool]
) -> str:
    """Pick a unique component name from a joined style name and an element tag.

    The prefix is the style name, or ``Styled`` when there is none or the tag
    already contains it (no ``ButtonButton``).  The suffix comes from
    :data:`TAG_SUFFIXES` or the tag itself.  Taken names get ``2``, ``3``, ...
    """
    if not style_name or style_name.lower() in tag.lower():
        prefix = "Styled"
    else:
        prefix = upper_first(style_name)
    suffix = TAG_SUFFIXES.get(tag) or upper_first(_STRIP_RE.sub("", tag))
    name = prefix if prefix.endswith(suffix) else prefix + suffix
    if is_taken(name):
        n = 2
        while is_taken(f"{name}{n}"):
            n += 1
        name = f"{name}{n}"
    return name


def render_declaration(record: ComponentRecord, styled: str = "styled") -> str:
    """Source text of the ``const Name = styled.tag`...`;`` declaration."""
    if not record.is_intrinsic:
        factory = f"{styled}({record.element_tag})"
    elif _IDENTIFIER_RE.match(record.element_tag):
        factory = f"{styled}.{record.element_tag}"
    else:
        factory = f'{styled}("{record.element_tag}")'
    return f"const {record.name} = {factory}`{record.css_text}`;"


class ComponentSynthesizer:
    """Creates component records and renames the elements that use them."""

    def __init__(
        self,
        registry: ComponentRegistry,
        bindings: set[str],
        plan: EditPlan,
        config: TransformConfig,
    ) -> None:
        self.registry = registry
        self.bindings = bindings
        self.plan = plan
        self.config = config

    def synthesize(
        self, element: Element, style_names: Sequence[str], css_text: str
    ) -> ComponentRecord:
        style_name = join_style_names(style_names) if style_names else None
        name = generate_component_name(style_name, element.tag_text, self._is_taken)
        record = ComponentRecord(
            name=name,
            element_tag=element.tag_text,
            is_intrinsic=element.is_intrinsic,
            css_text=css_text,
        )
        self.registry.add(record)
        self._rename(element, name)
        logger.debug("Synthesized %s for <%s> (line %d)", name, element.tag_text, element.line)
        return record

    def declarations(self) -> list[str]:
        return [render_declaration(r, self.config.styled_identifier) for r in self.registry]

    def _is_taken(self, name: str) -> bool:
        return name in self.registry or name in self.bindings

    def _rename(self, element: Element, name: str) -> None:
        if element.tag is None:
            raise ValueError("Cannot rename an element without a tag")
        self.plan.replace(Span(element.tag.start_byte, element.tag.end_byte), name)
        if element.closing_tag is not None:
            closing = element.closing_tag
            self.plan.replace(Span(closing.start_byte, closing.end_byte), name)
