from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# at-rule name (with marker) -> description
AT_RULES: Mapping[str, str] = MappingProxyType(
    {
        "@import": "Includes content of another file.",
        "@keyframes": "Defines set of animation key frames.",
        "@media": "Defines a stylesheet for a particular media type.",
        "@font-face": "Allows for linking to fonts that are automatically activated when needed.",
        "@supports": "A conditional group rule whose condition tests whether the user agent supports CSS property:value pairs.",
        "@charset": "Defines character set of the document.",
        "@namespace": "Declares a prefix and associates it with a namespace name.",
        "@page": "Directive defines various page parameters.",
        "@layer": "Declares a cascade layer.",
        "@container": "A conditional group rule applied when a container matches a size query.",
        "@counter-style": "Defines a custom counter style.",
        "@font-feature-values": "Defines named values for the indices used to select alternate glyphs.",
        "@property": "Registers a custom property with a syntax, inheritance and initial value.",
    }
)

# Bodies of these at-rules hold rules rather than declarations
RULE_LIST_AT_RULES: frozenset[str] = frozenset(
    {
        "@media",
        "@supports",
        "@document",
        "@container",
        "@layer",
        "@keyframes",
        "@-webkit-keyframes",
        "@scope",
        "@starting-style",
    }
)

HTML_TAGS: tuple[str, ...] = (
    "body",
    "html",
    "div",
    "span",
    "a",
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "footer",
    "main",
    "nav",
    "section",
    "article",
    "aside",
    "ul",
    "ol",
    "li",
    "dl",
    "dt",
    "dd",
    "table",
    "thead",
    "tbody",
    "tfoot",
    "tr",
    "th",
    "td",
    "form",
    "input",
    "button",
    "select",
    "option",
    "textarea",
    "label",
    "fieldset",
    "legend",
    "img",
    "picture",
    "video",
    "audio",
    "canvas",
    "svg",
    "iframe",
    "blockquote",
    "pre",
    "code",
    "em",
    "strong",
    "small",
    "sub",
    "sup",
    "hr",
    "br",
    "figure",
    "figcaption",
    "details",
    "summary",
    "dialog",
)
