"""QSS stylesheet and segment colours for Ascent."""

from __future__ import annotations

from ..timer.plan import SegmentKind

SEGMENT_COLORS: dict[SegmentKind, str] = {
    SegmentKind.PRACTICE: "#F28C38",   # brand orange
    SegmentKind.REST:     "#3D7BF2",   # brand blue
}

DEFAULT_PALETTE: dict[str, str] = {
    "bg":           "#F6F4F0",
    "bg_secondary": "#FFFFFF",
    "accent":       "#F28C38",
    "accent2":      "#E0762A",
    "text":         "#111111",
    "text_muted":   "#7A7A7A",
    "danger":       "#E34B4B",
    "border":       "#E2DED8",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or DEFAULT_PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 18px;
    }}

    QLabel#timeLabel {{
        font-size: 64px;
        font-weight: 800;
    }}

    QLabel#segmentLabel {{
        color: {p['text_muted']};
        font-size: 15px;
        font-weight: 700;
        letter-spacing: 1px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 20px;
        font-weight: 600;
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: #FFFFFF;
        border: none;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
    }}

    QPushButton#dangerButton {{
        color: {p['danger']};
    }}

    QProgressBar {{
        border: none;
        border-radius: 4px;
        background-color: {p['border']};
        max-height: 8px;
    }}
    """


def progress_chunk_style(kind: SegmentKind | None) -> str:
    colour = SEGMENT_COLORS.get(kind, DEFAULT_PALETTE["accent"])
    return f"QProgressBar::chunk {{ background-color: {colour}; border-radius: 4px; }}"
