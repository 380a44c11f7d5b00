"""Static property table: accepted value grammar per CSS property."""

from __future__ import annotations

from dataclasses import dataclass

from csslsp.css.units import UnitCategory

_L = UnitCategory.LENGTH
_P = UnitCategory.PERCENTAGE
_A = UnitCategory.ANGLE
_T = UnitCategory.TIME

_BORDER_STYLES = (
    "none",
    "hidden",
    "dotted",
    "dashed",
    "solid",
    "double",
    "groove",
    "ridge",
    "inset",
    "outset",
)
_BORDER_WIDTHS = ("thin", "medium", "thick")
_GLOBAL = ("inherit", "initial", "unset", "revert")
_AUTO = ("auto",)
_TIMING_FUNCTIONS = (
    "ease",
    "ease-in",
    "ease-out",
    "ease-in-out",
    "linear",
    "step-start",
    "step-end",
)
_ALIGNMENT = (
    "normal",
    "stretch",
    "center",
    "start",
    "end",
    "flex-start",
    "flex-end",
    "baseline",
)
_CONTENT_DISTRIBUTION = ("space-between", "space-around", "space-evenly")
_OVERFLOW = ("visible", "hidden", "clip", "scroll", "auto")


@dataclass(frozen=True)
class PropertySchema:
    """Allowed-value descriptor of one property."""

    name: str
    description: str
    keywords: tuple[str, ...] = ()
    unit_categories: tuple[UnitCategory, ...] = ()
    accepts_numbers: bool = False
    accepts_colors: bool = False
    functions: tuple[str, ...] = ()  # Functional notations, names only


def _schema(
    name: str,
    description: str,
    keywords: tuple[str, ...] = (),
    units: tuple[UnitCategory, ...] = (),
    *,
    numbers: bool = False,
    colors: bool = False,
) -> PropertySchema:
    # "name()" entries are functional notations, not keywords
    functions = tuple(k[:-2] for k in keywords if k.endswith("()"))
    keywords = tuple(k for k in keywords if not k.endswith("()"))
    return PropertySchema(
        name=name,
        description=description,
        keywords=keywords + _GLOBAL,
        functions=functions,
        unit_categories=units,
        accepts_numbers=numbers or bool(units),
        accepts_colors=colors,
    )


PROPERTIES: tuple[PropertySchema, ...] = (
    _schema(
        "display",
        "In combination with 'float' and 'position', determines the type of box or boxes that are generated for an element.",
        (
            "block",
            "inline",
            "inline-block",
            "flex",
            "inline-flex",
            "grid",
            "inline-grid",
            "table",
            "table-row",
            "table-cell",
            "list-item",
            "contents",
            "flow-root",
            "none",
        ),
    ),
    _schema(
        "position",
        "The position CSS property sets how an element is positioned in a document.",
        ("static", "relative", "absolute", "fixed", "sticky"),
    ),
    _schema("top", "Specifies how far an absolutely positioned box's top margin edge is offset below the top edge of the box's containing block.", _AUTO, (_L, _P)),
    _schema("right", "Specifies how far an absolutely positioned box's right margin edge is offset to the left of the right edge of the box's containing block.", _AUTO, (_L, _P)),
    _schema("bottom", "Specifies how far an absolutely positioned box's bottom margin edge is offset above the bottom edge of the box's containing block.", _AUTO, (_L, _P)),
    _schema("left", "Specifies how far an absolutely positioned box's left margin edge is offset to the right of the left edge of the box's containing block.", _AUTO, (_L, _P)),
    _schema("z-index", "For a positioned box, the 'z-index' property specifies the stack level of the box in the current stacking context.", _AUTO, numbers=True),
    _schema("float", "Specifies how a box should be floated.", ("left", "right", "none", "inline-start", "inline-end")),
    _schema("clear", "Indicates which sides of an element's box(es) may not be adjacent to an earlier floating box.", ("none", "left", "right", "both")),
    _schema(
        "vertical-align",
        "Affects the vertical positioning of the inline boxes generated by an inline-level element inside a line box.",
        (
            "auto",
            "baseline",
            "bottom",
            "middle",
            "sub",
            "super",
            "text-bottom",
            "text-top",
            "top",
            "-webkit-baseline-middle",
        ),
        (_L, _P),
    ),
    _schema("width", "Specifies the width of the content area, padding area or border area of certain boxes.", ("auto", "min-content", "max-content", "fit-content"), (_L, _P)),
    _schema("height", "Specifies the height of the content area, padding area or border area of certain boxes.", ("auto", "min-content", "max-content", "fit-content"), (_L, _P)),
    _schema("min-width", "Allows authors to constrain content width to a certain range.", ("auto", "min-content", "max-content", "fit-content"), (_L, _P)),
    _schema("min-height", "Allows authors to constrain content height to a certain range.", ("auto", "min-content", "max-content", "fit-content"), (_L, _P)),
    _schema("max-width", "Allows authors to constrain content width to a certain range.", ("none", "min-content", "max-content", "fit-content"), (_L, _P)),
    _schema("max-height", "Allows authors to constrain content height to a certain range.", ("none", "min-content", "max-content", "fit-content"), (_L, _P)),
    _schema("margin", "Shorthand property to set values for the thickness of the margin area.", _AUTO, (_L, _P)),
    _schema("margin-top", "Shorthand property to set values for the thickness of the margin area.", _AUTO, (_L, _P)),
    _schema("margin-right", "Shorthand property to set values for the thickness of the margin area.", _AUTO, (_L, _P)),
    _schema("margin-bottom", "Shorthand property to set values for the thickness of the margin area.", _AUTO, (_L, _P)),
    _schema("margin-left", "Shorthand property to set values for the thickness of the margin area.", _AUTO, (_L, _P)),
    _schema("padding", "Shorthand property to set values for the thickness of the padding area.", (), (_L, _P)),
    _schema("padding-top", "Shorthand property to set values for the thickness of the padding area.", (), (_L, _P)),
    _schema("padding-right", "Shorthand property to set values for the thickness of the padding area.", (), (_L, _P)),
    _schema("padding-bottom", "Shorthand property to set values for the thickness of the padding area.", (), (_L, _P)),
    _schema("padding-left", "Shorthand property to set values for the thickness of the padding area.", (), (_L, _P)),
    _schema("box-sizing", "Specifies the behavior of the 'width' and 'height' properties.", ("content-box", "border-box")),
    _schema("overflow", "Shorthand for setting 'overflow-x' and 'overflow-y'.", _OVERFLOW),
    _schema("overflow-x", "Specifies the handling of overflow in the horizontal direction.", _OVERFLOW),
    _schema("overflow-y", "Specifies the handling of overflow in the vertical direction.", _OVERFLOW),
    _schema("visibility", "Specifies whether the boxes generated by an element are rendered.", ("visible", "hidden", "collapse")),
    _schema("opacity", "Opacity of an element's text, where 1 is opaque and 0 is entirely transparent.", (), numbers=True),
    _schema("color", "Sets the color of an element's text.", ("currentColor", "transparent"), colors=True),
    _schema(
        "background",
        "Shorthand property for setting most background properties at the same place in the style sheet.",
        (
            "none",
            "scroll",
            "fixed",
            "local",
            "repeat",
            "repeat-x",
            "repeat-y",
            "no-repeat",
            "top",
            "bottom",
            "left",
            "right",
            "center",
            "transparent",
        ),
        (_L, _P),
        colors=True,
    ),
    _schema("background-color", "Sets the background color of an element.", ("currentColor", "transparent"), colors=True),
    _schema("background-image", "Sets the background image(s) of an element.", ("none",)),
    _schema("background-repeat", "Specifies how background images are tiled after they have been sized and positioned.", ("repeat", "repeat-x", "repeat-y", "no-repeat", "space", "round")),
    _schema("background-position", "Specifies the initial position of the background image(s).", ("top", "bottom", "left", "right", "center"), (_L, _P)),
    _schema("background-size", "Specifies the size of the background images.", ("auto", "cover", "contain"), (_L, _P)),
    _schema("background-attachment", "Specifies whether background images are fixed with regard to the viewport or scroll along with the element.", ("scroll", "fixed", "local")),
    _schema("border", "Shorthand property for setting border width, style, and color.", _BORDER_STYLES + _BORDER_WIDTHS, (_L,), colors=True),
    _schema("border-top", "Shorthand property for setting border width, style and color.", _BORDER_STYLES + _BORDER_WIDTHS, (_L,), colors=True),
    _schema("border-right", "Shorthand property for setting border width, style and color.", _BORDER_STYLES + _BORDER_WIDTHS, (_L,), colors=True),
    _schema("border-bottom", "Shorthand property for setting border width, style and color.", _BORDER_STYLES + _BORDER_WIDTHS, (_L,), colors=True),
    _schema("border-left", "Shorthand property for setting border width, style and color.", _BORDER_STYLES + _BORDER_WIDTHS, (_L,), colors=True),
    _schema("border-color", "The color of the border around all four edges of an element.", ("currentColor", "transparent"), colors=True),
    _schema("border-style", "The style of the border around edges of an element.", _BORDER_STYLES),
    _schema("border-width", "Shorthand that sets the four 'border-*-width' properties.", _BORDER_WIDTHS, (_L,)),
    _schema("border-radius", "Defines the radii of the outer border edge.", (), (_L, _P)),
    _schema("border-collapse", "Selects a table's border model.", ("collapse", "separate")),
    _schema("outline", "Shorthand property for 'outline-style', 'outline-width', and 'outline-color'.", ("auto", "invert") + _BORDER_STYLES + _BORDER_WIDTHS, (_L,), colors=True),
    _schema("outline-color", "The color of the outline.", ("invert", "currentColor"), colors=True),
    _schema("box-shadow", "Attaches one or more drop-shadows to the box.", ("none", "inset"), (_L,), colors=True),
    _schema("text-shadow", "Enables shadow effects to be applied to the text of the element.", ("none",), (_L,), colors=True),
    _schema(
        "font",
        "Shorthand property for setting 'font-style', 'font-variant', 'font-weight', 'font-size', 'line-height', and 'font-family'.",
        ("caption", "icon", "menu", "message-box", "small-caption", "status-bar", "bold", "bolder", "lighter", "italic", "oblique", "normal"),
        (_L, _P),
    ),
    _schema("font-family", "Specifies a prioritized list of font family names or generic family names.", ("serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui")),
    _schema(
        "font-size",
        "Indicates the desired height of glyphs from the font.",
        ("xx-small", "x-small", "small", "medium", "large", "x-large", "xx-large", "larger", "smaller"),
        (_L, _P),
    ),
    _schema("font-style", "Allows italic or oblique faces to be selected.", ("normal", "italic", "oblique")),
    _schema("font-weight", "Specifies weight of glyphs in the font, their degree of blackness or stroke thickness.", ("normal", "bold", "bolder", "lighter", "100", "200", "300", "400", "500", "600", "700", "800", "900")),
    _schema("line-height", "Determines the block-progression dimension of the text content area of an inline box.", ("normal",), (_L, _P)),
    _schema("letter-spacing", "Specifies the minimum, maximum, and optimal spacing between grapheme clusters.", ("normal",), (_L,)),
    _schema("text-align", "Describes how inline contents of a block are horizontally aligned if the contents do not completely fill the line box.", ("left", "right", "center", "justify", "start", "end")),
    _schema("text-decoration", "Decorations applied to font used for an element's text.", ("none", "underline", "overline", "line-through", "dashed", "dotted", "double", "solid", "wavy"), colors=True),
    _schema("text-transform", "Controls capitalization effects of an element's text.", ("none", "capitalize", "uppercase", "lowercase")),
    _schema("text-overflow", "Text can overflow for example when it is prevented from wrapping.", ("clip", "ellipsis")),
    _schema("white-space", "Specifies how whitespace is handled in an element.", ("normal", "pre", "nowrap", "pre-wrap", "pre-line", "break-spaces")),
    _schema("word-break", "Specifies line break opportunities for non-CJK scripts.", ("normal", "break-all", "keep-all", "break-word")),
    _schema("list-style", "Shorthand for setting 'list-style-type', 'list-style-position' and 'list-style-image'.", ("none", "disc", "circle", "square", "decimal", "inside", "outside")),
    _schema("cursor", "Allows control over cursor appearance in an element.", ("auto", "default", "pointer", "text", "move", "wait", "help", "crosshair", "not-allowed", "grab", "grabbing", "none")),
    _schema("content", "Determines which page-based occurrence of a given element is applied to a counter or string value.", ("none", "normal", "open-quote", "close-quote", "attr()", "counter()")),
    _schema("flex", "Specifies the components of a flexible length: the flex grow factor and flex shrink factor, and the flex basis.", ("auto", "none", "content"), (_L, _P)),
    _schema("flex-direction", "Specifies how flex items are placed in the flex container.", ("row", "row-reverse", "column", "column-reverse")),
    _schema("flex-wrap", "Controls whether the flex container is single-line or multi-line.", ("nowrap", "wrap", "wrap-reverse")),
    _schema("flex-grow", "Sets the flex grow factor.", (), numbers=True),
    _schema("flex-shrink", "Sets the flex shrink factor.", (), numbers=True),
    _schema("flex-basis", "Sets the flex basis.", ("auto", "content"), (_L, _P)),
    _schema("justify-content", "Aligns flex items along the main axis of the current line of the flex container.", _ALIGNMENT + _CONTENT_DISTRIBUTION + ("left", "right")),
    _schema("align-items", "Aligns flex items along the cross axis of the current line of the flex container.", _ALIGNMENT),
    _schema("align-self", "Allows the default alignment along the cross axis to be overridden for individual flex items.", ("auto",) + _ALIGNMENT),
    _schema("align-content", "Aligns a flex container's lines within the flex container.", _ALIGNMENT + _CONTENT_DISTRIBUTION),
    _schema("gap", "Shorthand that specifies the gutters between grid or flex items.", ("normal",), (_L, _P)),
    _schema("grid-template-columns", "Specifies the line names and track sizing functions of the grid columns.", ("none", "auto", "min-content", "max-content", "subgrid", "repeat()", "minmax()"), (_L, _P)),
    _schema("grid-template-rows", "Specifies the line names and track sizing functions of the grid rows.", ("none", "auto", "min-content", "max-content", "subgrid", "repeat()", "minmax()"), (_L, _P)),
    _schema("order", "Controls the order in which children of a flex container appear within the flex container.", (), numbers=True),
    _schema("transform", "A two-dimensional transformation is applied to an element through the 'transform' property.", ("none", "matrix()", "rotate()", "scale()", "translate()", "skew()")),
    _schema("transform-origin", "Establishes the origin of transformation for an element.", ("top", "bottom", "left", "right", "center"), (_L, _P)),
    _schema("transition", "Shorthand property combines four of the transition properties into a single property.", ("all", "none") + _TIMING_FUNCTIONS, (_T,)),
    _schema("transition-duration", "Specifies how long the transition from the old value to the new value should take.", (), (_T,)),
    _schema("transition-delay", "Defines when the transition will start.", (), (_T,)),
    _schema("transition-property", "Specifies the name of the CSS property to which the transition is applied.", ("all", "none")),
    _schema("transition-timing-function", "Describes how the intermediate values used during a transition will be calculated.", _TIMING_FUNCTIONS),
    _schema("animation", "Shorthand property combines six of the animation properties into a single property.", ("none", "infinite", "alternate", "reverse", "forwards", "backwards", "both", "paused", "running") + _TIMING_FUNCTIONS, (_T,)),
    _schema("animation-duration", "Defines the length of time that an animation takes to complete one cycle.", (), (_T,)),
    _schema("animation-name", "Defines a list of animations that apply.", ("none",)),
    _schema("filter", "Processes an element's rendering before it is displayed in the document.", ("none", "blur()", "brightness()", "contrast()", "grayscale()", "hue-rotate()", "invert()", "opacity()", "saturate()", "sepia()")),
    _schema("rotate", "Specifies a rotation, applied independently of the 'transform' property.", ("none",), (_A,)),
    _schema("pointer-events", "Specifies under what circumstances a given element can be the target element for a pointer event.", ("auto", "none", "visiblePainted", "visibleFill", "visibleStroke", "visible", "painted", "fill", "stroke", "all")),
    _schema("user-select", "Controls the appearance of selection.", ("auto", "none", "text", "all", "contain")),
    _schema("fill", "Paints the interior of the given graphical element.", ("none", "currentColor"), colors=True),
    _schema("stroke", "Paints along the outline of the given graphical element.", ("none", "currentColor"), colors=True),
    _schema("caret-color", "Controls the color of the text insertion indicator.", ("auto", "currentColor"), colors=True),
)
