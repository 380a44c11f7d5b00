"""Read-only CSS knowledge base assembled from the static tables."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from csslsp.css.colors import COLOR_FUNCTIONS, NAMED_COLORS
from csslsp.css.properties import PROPERTIES, PropertySchema
from csslsp.css.selectors import AT_RULES, HTML_TAGS, RULE_LIST_AT_RULES
from csslsp.css.units import UNIVERSAL_UNIT_CATEGORIES, UnitCategory, units_for

__all__ = [
    "KnowledgeBase",
    "PropertySchema",
    "build_knowledge_base",
]


@dataclass(frozen=True)
class KnowledgeBase:
    """Process-wide static data consulted by the completion engine."""

    properties: Mapping[str, PropertySchema]
    named_colors: Mapping[str, str]
    color_functions: Mapping[str, str]
    at_rules: Mapping[str, str]
    rule_list_at_rules: frozenset[str]
    tag_selectors: tuple[str, ...]

    def property_schema(self, name: str) -> PropertySchema | None:
        """Look up a property by name, ignoring case."""
        return self.properties.get(name.lower())

    def units_of(
        self, schema: PropertySchema | None
    ) -> list[tuple[str, UnitCategory]]:
        """Unit suffixes a value accepts; length and percentage when unknown."""
        if schema is None:
            return units_for(UNIVERSAL_UNIT_CATEGORIES)
        return units_for(schema.unit_categories)

    def holds_rules(self, at_rule_name: str) -> bool:
        return at_rule_name.lower() in self.rule_list_at_rules


def build_knowledge_base() -> KnowledgeBase:
    """Assemble the knowledge base from the static tables."""
    properties = {schema.name: schema for schema in PROPERTIES}
    return KnowledgeBase(
        properties=MappingProxyType(properties),
        named_colors=NAMED_COLORS,
        color_functions=COLOR_FUNCTIONS,
        at_rules=AT_RULES,
        rule_list_at_rules=RULE_LIST_AT_RULES,
        tag_selectors=HTML_TAGS,
    )
