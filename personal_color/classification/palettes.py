"""Descriptions and recommended palettes for each color type."""

from personal_color.analysis.models import ColorType, Palette

DESCRIPTIONS: dict[ColorType, str] = {
    ColorType.SPRING_WARM: (
        "A bright, radiant warm tone that suits lively colors. "
        "Coral, peach and light gold shades are recommended."
    ),
    ColorType.SUMMER_COOL: (
        "A soft, elegant cool tone that suits pastels and silver. "
        "Lavender, rose and mint shades are recommended."
    ),
    ColorType.AUTUMN_WARM: (
        "A deep, warm tone that suits earthy colors. "
        "Brown, orange and deep gold shades are recommended."
    ),
    ColorType.WINTER_COOL: (
        "A vivid, intense cool tone that suits high-contrast colors. "
        "Navy, red and silver shades are recommended."
    ),
    ColorType.NEUTRAL: (
        "A neutral tone with both warm and cool traits that can carry a wide range of colors."
    ),
}

PALETTES: dict[ColorType, Palette] = {
    ColorType.SPRING_WARM: Palette(
        primary=("#FFB6C1", "#FFA07A", "#F0E68C", "#98FB98"),
        secondary=("#FF6347", "#FFD700", "#ADFF2F", "#FF69B4"),
        accent=("#FF4500", "#DAA520", "#32CD32"),
    ),
    ColorType.SUMMER_COOL: Palette(
        primary=("#E6E6FA", "#B0C4DE", "#F0F8FF", "#DDA0DD"),
        secondary=("#9370DB", "#87CEEB", "#98FB98", "#F0E68C"),
        accent=("#6A5ACD", "#4682B4", "#00CED1"),
    ),
    ColorType.AUTUMN_WARM: Palette(
        primary=("#D2691E", "#CD853F", "#B22222", "#8B4513"),
        secondary=("#A0522D", "#BC8F8F", "#F4A460", "#DEB887"),
        accent=("#8B0000", "#FF6347", "#DAA520"),
    ),
    ColorType.WINTER_COOL: Palette(
        primary=("#000080", "#800080", "#DC143C", "#008B8B"),
        secondary=("#4B0082", "#2F4F4F", "#8B008B", "#00008B"),
        accent=("#FF1493", "#0000CD", "#8A2BE2"),
    ),
    ColorType.NEUTRAL: Palette(
        primary=("#808080", "#A9A9A9", "#C0C0C0", "#D3D3D3"),
        secondary=("#696969", "#778899", "#B0C4DE", "#F5F5DC"),
        accent=("#2F4F4F", "#708090", "#556B2F"),
    ),
}


def describe(color_type: ColorType) -> str:
    return DESCRIPTIONS[color_type]


def recommend_palette(color_type: ColorType) -> Palette:
    return PALETTES[color_type]
