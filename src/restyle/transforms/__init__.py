"""Transforms: component synthesis and the final tree rewrite."""

from restyle.transforms.rewriter import RewriteSummary, TreeRewriter
from restyle.transforms.synthesizer import (
    TAG_SUFFIXES,
    ComponentSynthesizer,
    generate_component_name,
    join_style_names,
    render_declaration,
)

__all__ = [
    "TAG_SUFFIXES",
    "ComponentSynthesizer",
    "generate_component_name",
    "join_style_names",
    "render_declaration",
    "RewriteSummary",
    "TreeRewriter",
]
