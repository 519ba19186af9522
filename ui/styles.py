from rich.theme import Theme
from rich.style import Style
from rich.text import Text

from models import CardKind

SWIFT_ORANGE = "#F05138"
ACCENT_PURPLE = "#8E44AD"
WARNING_ORANGE = "#E67E22"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
TIP_GOLD = "#F1C40F"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=SWIFT_ORANGE, bold=True),
        "secondary": Style(color=ACCENT_PURPLE, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "warning": Style(color=WARNING_ORANGE),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "code": Style(color=TEXT_WHITE),
        "tip": Style(color=TIP_GOLD),
        "progress_complete": Style(color=SUCCESS_GREEN, bold=True),
        "progress_remaining": Style(color=MUTED_GRAY),
        "title": Style(color=SWIFT_ORANGE, bold=True),
        "subtitle": Style(color=MUTED_GRAY),
    }
)

CARD_COLORS = {
    CardKind.CONCEPT: INFO_BLUE,
    CardKind.CODE: MUTED_GRAY,
    CardKind.TIP: TIP_GOLD,
    CardKind.WIDGET: SWIFT_ORANGE,
}


def get_tone_style(tone: str) -> Style:
    """Get style for a widget headline tone."""
    styles = {
        "success": Style(color=SUCCESS_GREEN, bold=True),
        "warning": Style(color=WARNING_ORANGE, bold=True),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE, bold=True),
    }
    return styles.get(tone, Style(bold=True))


def create_progress_bar(fraction: float, width: int = 30) -> str:
    """Create a text-based progress bar for a fraction in [0, 1]."""
    fraction = max(0.0, min(1.0, fraction))
    filled = int(width * fraction)
    return "█" * filled + "░" * (width - filled)


def create_app_banner() -> Text:
    """Create the home screen banner text."""
    banner = Text()
    banner.append("╔══════════════════════════════════════╗\n", Style(color=SWIFT_ORANGE))
    banner.append("║          Swift 学习之旅              ║\n", Style(color=SWIFT_ORANGE, bold=True))
    banner.append("║          Swift Tutor                 ║\n", Style(color=ACCENT_PURPLE))
    banner.append("╚══════════════════════════════════════╝", Style(color=SWIFT_ORANGE))
    return banner


def create_lesson_complete_header(title: str) -> Text:
    """Create lesson complete header."""
    header = Text()
    header.append("🎉 ", Style(color=TIP_GOLD))
    header.append(f"{title} 完成！", Style(color=SWIFT_ORANGE, bold=True))
    return header
