# floorplan/styles.py
# Room colour schemes
import zlib

WALL_COLOR = "#333333"
STANDARD_COLOR = "#D0D0D0"
MONOCHROME_COLOR = "#B5DBFF"
CONTRAST_FALLBACK = "#E8E8E8"
PASTEL_MIX = 0.4

CONTRAST_COLORS = {
    "LivingRoom": "#FFBDB9",
    "Bathroom": "#A0D0F0",
    "MasterRoom": "#FFDCC5",
    "Kitchen": "#E2CCE2",
    "SecondRoom": "#F9DD7D",
    "ChildRoom": "#DFBDFF",
    "DiningRoom": "#BADEBC",
    "Balcony": "#C2E5E2",
    "PoojaRoom": "#CDE6F9",
    "Wall": WALL_COLOR,
}

# Extra colours handed out to room types missing from CONTRAST_COLORS
EXTENDED_PALETTE = [
    "#F7C8E0", "#C5E8E7", "#FFD6A5", "#BDE0FE", "#C8F7C5", "#EAD7F7", "#FFF5BA",
    "#FDC5F5", "#C9F5E9", "#F7D9C4", "#C4E3F7", "#F7EAC8", "#E2C5F7", "#BFFCC6",
    "#FFCBC1", "#C6F0FC", "#F5CFEA", "#FCE2CE", "#D5F6CE", "#D8C9FC", "#F0E4A8",
    "#C1E1DC", "#E8C6FF", "#FFD7D0", "#C6F7F3", "#FAE1B5", "#E4D1F9", "#BFE1B0",
    "#FCD4B2", "#D2E0FB", "#EFC6C4", "#B9F8F4", "#FDE6D9", "#E6F0BD", "#D3E8F8",
]


def lighten(color: str, amount: float) -> str:
    """Mix a ``#RRGGBB`` colour toward white by *amount* (0..1)."""
    r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    r, g, b = (int(c + (255 - c) * amount) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def _contrast_color(room_type: str) -> str:
    if room_type in CONTRAST_COLORS:
        return CONTRAST_COLORS[room_type]
    if not room_type:
        return CONTRAST_FALLBACK
    # crc32 is stable across processes, unlike hash()
    return EXTENDED_PALETTE[zlib.crc32(room_type.encode("utf-8")) % len(EXTENDED_PALETTE)]


def room_color(room_type: str, scheme: str = "standard") -> str:
    if room_type == "Wall":
        return WALL_COLOR
    if scheme == "monochrome":
        return MONOCHROME_COLOR
    if scheme == "pastel":
        return lighten(STANDARD_COLOR, PASTEL_MIX)
    if scheme == "contrast":
        return _contrast_color(room_type)
    return STANDARD_COLOR
