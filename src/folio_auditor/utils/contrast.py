# src/folio_auditor/utils/contrast.py
import re
from typing import Dict, Optional, Tuple

RGB = Tuple[int, int, int]

NAMED_RGB: Dict[str, RGB] = {
    'black': (0, 0, 0),
    'white': (255, 255, 255),
    'red': (255, 0, 0),
    'green': (0, 128, 0),
    'blue': (0, 0, 255),
    'yellow': (255, 255, 0),
    'purple': (128, 0, 128),
    'orange': (255, 165, 0),
    'pink': (255, 192, 203),
    'gray': (128, 128, 128),
    'grey': (128, 128, 128),
    'brown': (165, 42, 42),
    'cyan': (0, 255, 255),
    'magenta': (255, 0, 255),
}

_HEX = re.compile(r'^#([0-9a-f]{3}|[0-9a-f]{6})$')
_RGB_FUNC = re.compile(r'^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$')


def parse_declarations(style: str) -> Dict[str, str]:
    """Splits an inline style attribute into a {property: value} mapping (lower-cased keys)."""
    declarations = {}
    for part in style.split(';'):
        if ':' not in part:
            continue
        prop, value = part.split(':', 1)
        declarations[prop.strip().lower()] = value.strip()
    return declarations


def parse_color(value: Optional[str]) -> Optional[RGB]:
    """Parses hex, rgb()/rgba() and basic named colours. Anything else (gradients, var(), ...) is None."""
    if not value:
        return None
    value = value.strip().lower()

    if value in NAMED_RGB:
        return NAMED_RGB[value]

    match = _HEX.match(value)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = ''.join(ch * 2 for ch in digits)
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)

    match = _RGB_FUNC.match(value)
    if match:
        channels = tuple(min(int(c), 255) for c in match.groups())
        return channels  # type: ignore[return-value]

    return None


def relative_luminance(rgb: RGB) -> float:
    def channel(c: int) -> float:
        s = c / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: RGB, background: RGB) -> float:
    """WCAG 2.x contrast ratio, from 1.0 (identical) to 21.0 (black on white)."""
    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def inline_colors(style: str) -> Tuple[Optional[RGB], Optional[RGB]]:
    """Returns the parseable (color, background) pair of an inline style; either side may be None."""
    declarations = parse_declarations(style)
    foreground = parse_color(declarations.get('color'))
    background = parse_color(declarations.get('background-color')) or parse_color(declarations.get('background'))
    return foreground, background
