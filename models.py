from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CardKind(str, Enum):
    CONCEPT = "concept"
    CODE = "code"
    TIP = "tip"
    WIDGET = "widget"


# ============================================================================
# Lesson Content Models
# ============================================================================


class ContentCard(BaseModel):
    """One card on a section page.

    Concept and code cards carry a body, tip cards carry either a body or a
    list of tips, widget cards name an entry in the widget registry.
    """

    model_config = ConfigDict(frozen=True)

    kind: CardKind
    title: str = ""
    body: str | None = None
    tips: list[str] | None = None
    widget: str | None = None

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "ContentCard":
        if self.kind in (CardKind.CONCEPT, CardKind.CODE):
            if not self.body:
                raise ValueError(f"{self.kind.value} card '{self.title}' needs a body")
        elif self.kind == CardKind.TIP:
            if (self.body is None) == (self.tips is None):
                raise ValueError(
                    f"tip card '{self.title}' needs exactly one of body or tips"
                )
        elif self.kind == CardKind.WIDGET:
            if not self.widget:
                raise ValueError("widget card needs a widget name")
        return self


class Section(BaseModel):
    """One page of lesson content within a day's fixed linear sequence."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    title: str
    cards: list[ContentCard] = Field(default_factory=list)

    @property
    def widget_names(self) -> list[str]:
        """Registry names of the widget cards, in display order."""
        return [card.widget for card in self.cards if card.widget]


class Lesson(BaseModel):
    """A lesson day: navigation title, home-screen summary and sections."""

    model_config = ConfigDict(frozen=True)

    day: int = Field(ge=1)
    title: str  # e.g. "Day 1: Swift 基础"
    headline: str  # e.g. "Swift 基础语法"
    description: str = ""
    topics: list[str] = Field(default_factory=list)
    sections: list[Section]

    @model_validator(mode="after")
    def _check_section_order(self) -> "Lesson":
        if not self.sections:
            raise ValueError(f"lesson day {self.day} has no sections")
        indices = [section.index for section in self.sections]
        if indices != list(range(len(self.sections))):
            raise ValueError(
                f"lesson day {self.day} section indices must be 0..N-1 in order, "
                f"got {indices}"
            )
        return self

    @property
    def section_titles(self) -> list[str]:
        return [section.title for section in self.sections]

    @property
    def widget_names(self) -> list[str]:
        """Registry names of every widget used by this lesson."""
        names: list[str] = []
        for section in self.sections:
            names.extend(section.widget_names)
        return names
