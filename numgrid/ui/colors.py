"""Theme colors and color utilities for the UI."""


class GridColors:
    """Light teal palette shared by the grid, HUD and overlays."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#80deea"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    PRIMARY_DARK = "#005662"

    CORAL = "#ff8a65"
    AMBER = "#ffb74d"
    MINT = "#69f0ae"
    ERROR = "#ff4c4c"

    CELL_BG = "#ffffff"
    CELL_BORDER = "#b0bec5"
    CELL_CLEARED = "#e8f5e9"
    CELL_SELECTED = "#ffe0b2"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_SECONDARY = "#4a6572"
    TEXT_MUTED = "#78909c"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def timer_color(remaining: float, limit: float) -> str:
    """Timer label color: primary while time is plentiful, shading to red near zero."""
    if limit <= 0:
        return GridColors.PRIMARY
    fraction = max(0.0, min(1.0, remaining / limit))
    if fraction >= 0.5:
        return GridColors.PRIMARY
    return blend_hex(GridColors.ERROR, GridColors.PRIMARY, fraction * 2)
