"""Normalized query results and the composite reports built from them."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

ERROR_PREFIX = "Error: "
NOT_AVAILABLE = "Not available"


class QueryOutcome(BaseModel):
    """Result of one logical query: raw data or an ``Error: ...`` message.

    Build instances with :meth:`data` / :meth:`error` so the tag and the
    text always agree.
    """

    kind: Literal["data", "error"]
    text: str

    model_config = {"frozen": True}

    @classmethod
    def data(cls, text: str) -> QueryOutcome:
        return cls(kind="data", text=text)

    @classmethod
    def error(cls, detail: str) -> QueryOutcome:
        return cls(kind="error", text=f"{ERROR_PREFIX}{detail}")

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


class ReportSection(BaseModel):
    label: str
    outcome: QueryOutcome

    def render(self, *, mask_errors: bool = False) -> str:
        if mask_errors and self.outcome.is_error:
            return f"{self.label}: {NOT_AVAILABLE}"
        return f"{self.label}:\n{self.outcome.text}"


class CompositeReport(BaseModel):
    """Sections rendered in declaration order, separated by blank lines."""

    title: Optional[str] = None
    sections: list[ReportSection] = []

    def add(self, label: str, outcome: QueryOutcome) -> None:
        self.sections.append(ReportSection(label=label, outcome=outcome))

    @property
    def failed_sections(self) -> list[str]:
        return [s.label for s in self.sections if s.outcome.is_error]

    def render(self, *, mask_errors: bool = False) -> str:
        blocks = [s.render(mask_errors=mask_errors) for s in self.sections]
        if self.title:
            blocks.insert(0, self.title)
        return "\n\n".join(blocks)
