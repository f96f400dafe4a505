"""
Discovery (wizard Q&A) and suggestion domain models.
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

from pydantic import Field

from project_generator.core.constants import QuestionCategory, QuestionType
from project_generator.domain.base import CamelModel

Answer = Union[str, list[str]]


class DiscoveryQuestion(CamelModel):
    """A follow-up question asked about the project."""

    id: str
    type: QuestionType = Field(default=QuestionType.TEXTAREA)
    question: str
    placeholder: Optional[str] = None
    options: Optional[list[str]] = None
    required: bool = True
    category: QuestionCategory = Field(default=QuestionCategory.OTHER)


class QuestionSet(CamelModel):
    """Questions returned to the wizard, with the reason they were chosen."""

    questions: list[DiscoveryQuestion] = Field(default_factory=list)
    reasoning: str = "Questions generated to improve your project"


class DiscoveryData(CamelModel):
    """Questions together with the user's answers."""

    questions: list[DiscoveryQuestion] = Field(default_factory=list)
    answers: dict[str, Answer] = Field(default_factory=dict)

    def answered(self) -> Iterator[tuple[DiscoveryQuestion, str]]:
        """Yield (question, answer text) for every question with a non-empty answer."""
        for question in self.questions:
            answer = self.answers.get(question.id)
            if not answer:
                continue
            text = ", ".join(answer) if isinstance(answer, list) else answer
            if text.strip():
                yield question, text


class TechStackChoice(CamelModel):
    """One suggested technology per layer ('none' when the layer is unused)."""

    frontend: str = "none"
    backend: str = "none"
    database: str = "none"


class TechStackSuggestion(CamelModel):
    """Feature and stack suggestion for the second wizard step."""

    features: list[str] = Field(default_factory=list)
    tech_stack: TechStackChoice = Field(default_factory=TechStackChoice)
    reasoning: str = ""
