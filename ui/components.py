from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich.columns import Columns
from rich.console import Group
from rich.syntax import Syntax
from rich import box
from typing import List, Optional

from models import CardKind, ContentCard, Lesson
from navigator import LessonNavigator
from widgets.base import Widget
from ui.styles import (
    SWIFT_ORANGE,
    ACCENT_PURPLE,
    TIP_GOLD,
    SUCCESS_GREEN,
    MUTED_GRAY,
    TEXT_WHITE,
    CARD_COLORS,
    create_app_banner,
    create_progress_bar,
    get_tone_style,
)


class ContentCardPanel:
    """A styled panel for a concept, code or tip card."""

    def __init__(self, card: ContentCard):
        self.card = card

    def render(self) -> Panel:
        card = self.card
        if card.kind == CardKind.CODE:
            body = Syntax(card.body or "", "swift", theme="monokai", word_wrap=True)
        elif card.kind == CardKind.TIP and card.tips is not None:
            body = Text()
            for i, tip in enumerate(card.tips):
                if i:
                    body.append("\n")
                body.append("• ", Style(color=TIP_GOLD, bold=True))
                body.append(tip, Style(color=TEXT_WHITE))
        else:
            body = Text(card.body or "", Style(color=TEXT_WHITE))

        return Panel(
            body,
            title=card.title or None,
            title_align="left",
            border_style=CARD_COLORS[card.kind],
            box=box.ROUNDED,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WidgetPanel:
    """A styled panel showing a widget's current result."""

    def __init__(self, widget: Widget, show_help: bool = True):
        self.widget = widget
        self.show_help = show_help

    def render(self) -> Panel:
        widget = self.widget
        parts = []

        headline = widget.headline()
        if headline is not None:
            message, tone = headline
            parts.append(Align.center(Text(message, get_tone_style(tone))))

        rows = widget.display_rows()
        if rows:
            table = Table(show_header=False, box=box.SIMPLE, border_style=MUTED_GRAY, expand=True)
            table.add_column("Label", style=Style(color=MUTED_GRAY), no_wrap=True)
            table.add_column("Value", style=Style(color=TEXT_WHITE))
            for label, value in rows:
                table.add_row(Text(label), Text(value))
            parts.append(table)

        if self.show_help:
            parts.append(self._help_text())

        return Panel(
            Group(*parts),
            title=widget.title,
            title_align="left",
            subtitle=Text("field=value · action [arg] · Enter 继续") if self.show_help else None,
            border_style=SWIFT_ORANGE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _help_text(self) -> Text:
        widget = self.widget
        text = Text()
        fields = widget.editable_fields
        if fields:
            text.append("可编辑字段: ", Style(color=MUTED_GRAY))
            for i, name in enumerate(fields):
                if i:
                    text.append(", ", Style(color=MUTED_GRAY))
                value = getattr(widget.inputs, name)
                if isinstance(value, list):
                    value = ",".join(str(getattr(v, "value", v)) for v in value)
                else:
                    value = getattr(value, "value", value)
                text.append(name, Style(color=TIP_GOLD, bold=True))
                text.append(f"={value}", Style(color=MUTED_GRAY))
        for action, description in widget.actions.items():
            text.append("\n")
            text.append(f"  {action}", Style(color=ACCENT_PURPLE, bold=True))
            text.append(f"  {description}", Style(color=MUTED_GRAY))
        return text

    def __rich__(self) -> Panel:
        return self.render()


class LessonHeader:
    """Lesson title, current section and section progress."""

    def __init__(self, lesson: Lesson, navigator: LessonNavigator):
        self.lesson = lesson
        self.navigator = navigator

    def render(self) -> Panel:
        nav = self.navigator
        content = Text()
        content.append(nav.current_section().title, Style(color=SWIFT_ORANGE, bold=True))
        content.append("\n")
        content.append(create_progress_bar(nav.progress), Style(color=SUCCESS_GREEN))
        content.append(f"  {nav.position_label}", Style(color=MUTED_GRAY))

        previous = "" if nav.is_first else "[p] 上一节   "
        subtitle = f"{previous}[n] {nav.next_label}   [q] 关闭"

        return Panel(
            Align.center(content),
            title=self.lesson.title,
            subtitle=Text(subtitle),
            border_style=SWIFT_ORANGE,
            box=box.HEAVY,
            padding=(0, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class DayCard:
    """Home screen card for one lesson day."""

    def __init__(self, lesson: Lesson, selected: bool = False):
        self.lesson = lesson
        self.selected = selected

    def render(self) -> Panel:
        lesson = self.lesson
        content = Text()
        content.append(f"Day {lesson.day}\n", Style(color=MUTED_GRAY))
        content.append(lesson.headline, Style(color=SWIFT_ORANGE, bold=True))
        if lesson.description:
            content.append(f"\n{lesson.description}", Style(color=TEXT_WHITE))
        for topic in lesson.topics:
            content.append("\n✓ ", Style(color=SUCCESS_GREEN))
            content.append(topic, Style(color=MUTED_GRAY))

        return Panel(
            content,
            border_style=SWIFT_ORANGE if self.selected else MUTED_GRAY,
            box=box.HEAVY if self.selected else box.ROUNDED,
            padding=(1, 2),
            width=36,
        )

    def __rich__(self) -> Panel:
        return self.render()


class HomeScreen:
    """Home screen: banner, course progress, day cards and a coming-soon card."""

    def __init__(self, lessons: List[Lesson], selected_day: int, total_days: int):
        self.lessons = lessons
        self.selected_day = selected_day
        self.total_days = total_days

    def render(self) -> Panel:
        progress = Text()
        progress.append(
            create_progress_bar(self.selected_day / self.total_days), Style(color=SUCCESS_GREEN)
        )
        progress.append("\n")
        progress.append(course_progress_label(self.selected_day, self.total_days), Style(color=MUTED_GRAY))

        cards = [DayCard(lesson, lesson.day == self.selected_day) for lesson in self.lessons]
        coming_soon = self._coming_soon()
        if coming_soon is not None:
            cards.append(coming_soon)

        return Panel(
            Group(
                Align.center(create_app_banner()),
                Text(),
                Align.center(progress),
                Text(),
                Columns(cards, padding=(1, 2)),
            ),
            subtitle="输入 Day 编号开始学习，q 退出",
            border_style=SWIFT_ORANGE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _coming_soon(self) -> Optional[Panel]:
        next_day = max((lesson.day for lesson in self.lessons), default=0) + 1
        if next_day > self.total_days:
            return None
        content = Text(justify="center")
        content.append("🕐 更多课程即将推出\n", Style(color=TIP_GOLD, bold=True))
        content.append(f"Day {next_day}-{self.total_days} 正在开发中\n敬请期待！", Style(color=MUTED_GRAY))
        return Panel(content, border_style=TIP_GOLD, box=box.ROUNDED, padding=(1, 2), width=36)

    def __rich__(self) -> Panel:
        return self.render()


class WidgetTable:
    """Table of every registered widget."""

    def __init__(self, widgets: List[type[Widget]]):
        self.widgets = widgets

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=SWIFT_ORANGE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("Day", justify="center")
        table.add_column("Name", style=Style(color=TIP_GOLD, bold=True))
        table.add_column("Title", style=Style(color=TEXT_WHITE))
        table.add_column("Actions", style=Style(color=MUTED_GRAY))

        for widget in sorted(self.widgets, key=lambda w: w.day):
            table.add_row(
                str(widget.day), widget.name, Text(widget.title), ", ".join(widget.actions)
            )

        return Panel(
            Align.center(table),
            title="Widgets",
            border_style=TIP_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


def course_progress_label(day: int, total_days: int) -> str:
    return f"学习进度：Day {day} / {total_days}"
