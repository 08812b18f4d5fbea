"""
Validation for quiz authoring payloads and submitted answer identifiers.

Shape checks stop at the first offending question; field checks collect
every empty-text message so the client can fix them in one pass.
"""
from typing import Any

from quizapp.config import Config
from quizapp.common.errors import (
    InvalidQuizShape,
    InvalidQuestionShape,
    FieldValidation,
    MalformedAnswer,
)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class QuizValidator:
    """
    Structural and field validator for quiz creation payloads.
    """

    QUIZ_SHAPE_MESSAGE = (
        f"Quiz must contain between {Config.MIN_QUESTIONS} and {Config.MAX_QUESTIONS} questions"
    )

    @classmethod
    def validate_question_count(cls, count: int) -> None:
        """
        Check a question count against the quiz limits.

        Raises:
            InvalidQuizShape: if the count is out of range
        """
        if count < Config.MIN_QUESTIONS or count > Config.MAX_QUESTIONS:
            raise InvalidQuizShape(cls.QUIZ_SHAPE_MESSAGE)

    @classmethod
    def validate_shape(cls, questions: Any) -> None:
        """
        Validate question and option counts, and the single correct answer rule.

        Args:
            questions: List of question dicts, each with an ``options`` list

        Raises:
            InvalidQuizShape: question count outside the allowed range
            InvalidQuestionShape: first question with bad options, by 1-based position
        """
        if not isinstance(questions, list):
            raise InvalidQuizShape(cls.QUIZ_SHAPE_MESSAGE)
        cls.validate_question_count(len(questions))

        for position, question in enumerate(questions, start=1):
            options = question.get('options') if isinstance(question, dict) else None

            if not isinstance(options, list) or len(options) < Config.MIN_OPTIONS:
                raise InvalidQuestionShape(position, f"must have at least {Config.MIN_OPTIONS} options")

            if len(options) > Config.MAX_OPTIONS:
                raise InvalidQuestionShape(position, f"cannot have more than {Config.MAX_OPTIONS} options")

            correct_count = sum(
                1 for opt in options if isinstance(opt, dict) and opt.get('isCorrect') is True
            )
            if correct_count != 1:
                raise InvalidQuestionShape(position, "must have exactly one correct answer")

    @classmethod
    def validate_fields(cls, payload: dict) -> None:
        """
        Check that every text field of an already shape-checked payload is non-empty.

        Raises:
            FieldValidation: listing one message per empty field
        """
        messages = []
        if _is_blank(payload.get('title')):
            messages.append('Quiz title is required')
        if _is_blank(payload.get('theme')):
            messages.append('Quiz theme is required')

        for question in payload.get('questions') or []:
            if _is_blank(question.get('text')):
                messages.append('Question text is required')
            for option in question.get('options') or []:
                text = option.get('text') if isinstance(option, dict) else None
                if _is_blank(text):
                    messages.append('Answer option text is required')

        if messages:
            raise FieldValidation(messages)

    @classmethod
    def validate(cls, payload: dict) -> None:
        """Run shape checks first, then field checks."""
        cls.validate_shape(payload.get('questions'))
        cls.validate_fields(payload)


def parse_identifier(value: Any, field: str) -> int:
    """
    Convert a submitted id to an int.

    Accepts ints and strings of digits. Booleans, floats and anything
    else are rejected rather than coerced.

    Raises:
        MalformedAnswer: if the value is not a valid identifier
    """
    if isinstance(value, bool):
        raise MalformedAnswer(f"{field} must be a numeric id, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.isdigit():
            return int(digits)
    raise MalformedAnswer(f"{field} must be a numeric id, got {value!r}")
