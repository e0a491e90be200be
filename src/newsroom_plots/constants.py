"""Pure data: house colors, palettes, fonts, and layout constants.

No library imports. Themes (theming.py), scales (scales.py) and the
matplotlib style (style.py) all read from these plain dicts and lists.
"""

# Core palette for the house theme
COLORS = {
    "bg": "#EBE1C3",
    "text": "#2B2B2B",
    "muted": "#6B6860",
    "accent": "#2E4D37",
    "accent_hover": "#3E6349",
    "surface": "#E4DAB9",
    "border": "#C4B892",
    "white": "#FFFFFF",
    "grey92": "#EBEBEB",
    "grey85": "#D9D9D9",
    "grey30": "#4D4D4D",
    "grey20": "#333333",
}

# Accent hues, darkened so they read on both parchment and white
SYNTAX = {
    "cyan": "#00a8c8",
    "amber": "#A26200",
    "purple": "#7021FF",
    "taupe": "#75715e",
    "olive": "#496D00",
    "magenta": "#D1064F",
    "sienna": "#A0522D",
}

# Default discrete color order. All pass WCAG AA graphical contrast (3:1+)
# against parchment #EBE1C3.
COLOR_CYCLE = [
    COLORS["accent"],    # #2E4D37 forest green   (7.21:1)
    SYNTAX["sienna"],    # #A0522D burnt sienna   (4.30:1)
    SYNTAX["amber"],     # #A26200 dark amber     (3.76:1)
    SYNTAX["magenta"],   # #D1064F dark magenta   (4.18:1)
    SYNTAX["purple"],    # #7021FF dark purple    (4.80:1)
    SYNTAX["olive"],     # #496D00 dark olive     (4.64:1)
    SYNTAX["taupe"],     # #75715e taupe          (3.76:1)
]

# Named discrete palettes for scale_color_palette() / scale_fill_palette().
PALETTES = {
    "house": COLOR_CYCLE,
    # Okabe-Ito, safe for the common forms of color blindness
    "okabe_ito": [
        "#E69F00", "#56B4E9", "#009E73", "#F0E442",
        "#0072B2", "#D55E00", "#CC79A7", "#000000",
    ],
    # ColorBrewer Set2
    "set2": [
        "#66C2A5", "#FC8D62", "#8DA0CB", "#E78AC3",
        "#A6D854", "#FFD92F", "#E5C494", "#B3B3B3",
    ],
    # ColorBrewer Dark2
    "dark2": [
        "#1B9E77", "#D95F02", "#7570B3", "#E7298A",
        "#66A61E", "#E6AB02", "#A6761D", "#666666",
    ],
    # One highlighted series against muted greys
    "highlight": [
        COLORS["accent"], "#9E9E9E", "#B5B5B5", "#CCCCCC",
    ],
}

# Endpoints for continuous gradients (scale_*_gradient defaults)
GRADIENT = {
    "low": "#132B43",
    "high": "#56B1F7",
}

# System fonts, as names matplotlib recognizes.
FONTS = {
    "sans": [
        "Helvetica Neue", "Helvetica", "Arial",
        "Segoe UI", "Roboto", "DejaVu Sans", "sans-serif",
    ],
    "mono": [
        "SF Mono", "SFMono-Regular", "Menlo",
        "Monaco", "Consolas", "monospace",
    ],
}

# Chart layout constants
LAYOUT = {
    "figsize": (8.5, 5.0),    # ~680px at 80dpi
    "dpi": 80,
    "base_size": 11,
    "title_size": 14,
    "label_size": 11,
    "tick_size": 9,
    "line_width": 2.0,
    "point_size": 6,
    "spine_width": 0.8,
    "grid_alpha": 0.5,
    "legend_alpha": 0.9,
    "bar_width": 0.8,
    "text_size": 9,
}
