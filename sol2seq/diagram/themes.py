"""Color palettes for the rendered diagram.

Exactly two palettes exist, selected by the ``light_colors`` flag.
"""

from __future__ import annotations

from dataclasses import dataclass, field

USER_INTERACTIONS = "User Interactions"
CONTRACT_INTERACTIONS = "Contract-to-Contract Interactions"
EVENT_DEFINITIONS = "Event Definitions"
CONTRACT_RELATIONSHIPS = "Contract Relationships"


@dataclass(frozen=True)
class Palette:
    """Theme variables plus section and legend background colors."""

    theme_variables: list[tuple[str, str]]
    section_colors: dict[str, str] = field(default_factory=dict)
    default_section_color: str = "rgb(240, 240, 240)"
    legend_color: str = "rgb(240, 240, 255)"

    def section_color(self, title: str) -> str:
        return self.section_colors.get(title, self.default_section_color)


DEFAULT_PALETTE = Palette(
    theme_variables=[
        ("primaryColor", "#f5f5f5"),
        ("primaryTextColor", "#333"),
        ("primaryBorderColor", "#999"),
        ("lineColor", "#666"),
        ("secondaryColor", "#f0f8ff"),
        ("tertiaryColor", "#fff5f5"),
    ],
    section_colors={
        USER_INTERACTIONS: "rgb(245, 245, 245)",
        CONTRACT_INTERACTIONS: "rgb(240, 248, 255)",
        EVENT_DEFINITIONS: "rgb(255, 245, 245)",
        CONTRACT_RELATIONSHIPS: "rgb(245, 255, 245)",
    },
    default_section_color="rgb(240, 240, 240)",
    legend_color="rgb(240, 240, 255)",
)

LIGHT_PALETTE = Palette(
    theme_variables=[
        ("primaryColor", "#fafbfc"),
        ("primaryTextColor", "#444"),
        ("primaryBorderColor", "#e1e4e8"),
        ("lineColor", "#a0aec0"),
        ("secondaryColor", "#f5fbff"),
        ("tertiaryColor", "#fff8f8"),
    ],
    section_colors={
        USER_INTERACTIONS: "rgb(252, 252, 255)",
        CONTRACT_INTERACTIONS: "rgb(248, 252, 255)",
        EVENT_DEFINITIONS: "rgb(255, 252, 252)",
        CONTRACT_RELATIONSHIPS: "rgb(252, 255, 252)",
    },
    default_section_color="rgb(250, 250, 250)",
    legend_color="rgb(248, 252, 255)",
)


def get_palette(light_colors: bool) -> Palette:
    return LIGHT_PALETTE if light_colors else DEFAULT_PALETTE
