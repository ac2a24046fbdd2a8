from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from quizmint.models.schemas import Question


class QuizStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    FAILED = "failed"
    COMPLETED = "completed"


@dataclass
class QuizState:
    """
    Position in the quiz plus the one-way failed flag.
    `index` stays within 0..total_questions; `failed` never resets.
    """

    total_questions: int
    index: int = 0
    failed: bool = False

    def __post_init__(self):
        if self.total_questions < 1:
            raise ValueError("A quiz needs at least one question.")

    @property
    def status(self) -> QuizStatus:
        if self.failed:
            return QuizStatus.FAILED
        if self.index >= self.total_questions:
            return QuizStatus.COMPLETED
        return QuizStatus.IN_PROGRESS

    def record_answer(self, correct: bool) -> QuizStatus:
        # Terminal states ignore further input.
        if self.status is not QuizStatus.IN_PROGRESS:
            return self.status
        if correct:
            self.index += 1
        else:
            self.failed = True
        return self.status


class Quiz:
    def __init__(self, questions: Sequence[Question]):
        self.questions = tuple(questions)
        self.state = QuizState(total_questions=len(self.questions))

    @property
    def status(self) -> QuizStatus:
        return self.state.status

    @property
    def current_question(self) -> Optional[Question]:
        if self.state.status is not QuizStatus.IN_PROGRESS:
            return None
        return self.questions[self.state.index]

    def submit(self, choice: int) -> QuizStatus:
        question = self.current_question
        if question is None:
            return self.state.status
        return self.state.record_answer(question.is_correct(choice))
