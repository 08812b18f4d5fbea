"""
Submission scoring engine.

Scores a batch of answers against a quiz's structure and persists the
submission header plus one row per accepted answer, all inside a single
transaction. Any validation failure rolls the whole batch back.
"""
from quizapp.common.errors import (
    QuizNotFound,
    MalformedSubmission,
    MalformedAnswer,
    DuplicateAnswer,
    UnknownQuestion,
    UnknownOption,
)
from quizapp.common.storage import StorageContext
from quizapp.quiz.models import QuizSubmission, UserAnswer
from quizapp.quiz.validators import QuizValidator, parse_identifier


class ScoreResult:
    """Outcome of a committed submission."""

    def __init__(self, score: int, total: int, submission_id: int):
        self.score = score
        self.total = total
        self.submission_id = submission_id

    @property
    def percentage(self) -> int:
        """Score as a whole percentage, halves rounded up."""
        return (200 * self.score + self.total) // (2 * self.total)

    def to_dict(self) -> dict:
        return {
            'score': f"{self.score}/{self.total}",
            'percentage': self.percentage,
            'submissionId': self.submission_id,
        }

    def __repr__(self) -> str:
        return f"<ScoreResult {self.score}/{self.total} ({self.percentage}%)>"


class SubmissionScorer:
    """
    Validates and scores answer batches.

    The quiz passed to ``submit`` only needs ``id``, ``questions`` and,
    per question, ``id`` and ``options`` whose items have ``id`` and
    ``is_correct``; it does not have to be an ORM object.
    """

    def __init__(self, storage: StorageContext):
        self.storage = storage

    def submit(self, quiz, answers) -> ScoreResult:
        """
        Score ``answers`` against ``quiz`` and persist the submission.

        Args:
            quiz: Loaded quiz structure
            answers: Sequence of ``{questionId, selectedOptionId}`` dicts

        Returns:
            ScoreResult for the committed submission

        Raises:
            MalformedSubmission: answers is not a list
            InvalidQuizShape: the quiz no longer has 3 to 10 questions
            MalformedAnswer, UnknownQuestion, DuplicateAnswer, UnknownOption:
                first offending answer, after rolling back
        """
        if not isinstance(answers, list):
            raise MalformedSubmission()

        total_questions = len(quiz.questions)
        QuizValidator.validate_question_count(total_questions)

        questions = {question.id: question for question in quiz.questions}

        with self.storage.transaction() as session:
            submission = QuizSubmission(quiz_id=quiz.id, score=0, total_questions=total_questions)
            session.add(submission)
            session.flush()

            answered = set()
            score = 0

            for answer in answers:
                question_id, option_id = self._read_answer(answer)

                question = questions.get(question_id)
                if question is None:
                    raise UnknownQuestion(question_id)

                if question_id in answered:
                    raise DuplicateAnswer(question_id)
                answered.add(question_id)

                selected = next((opt for opt in question.options if opt.id == option_id), None)
                if selected is None:
                    raise UnknownOption(option_id, question_id)

                session.add(UserAnswer(
                    submission_id=submission.id,
                    question_id=question_id,
                    selected_option_id=option_id,
                ))

                if selected.is_correct:
                    score += 1

            submission.score = score
            session.flush()
            submission_id = submission.id

        return ScoreResult(score, total_questions, submission_id)

    @staticmethod
    def _read_answer(answer) -> tuple:
        """Return ``(question_id, option_id)`` as ints or raise MalformedAnswer."""
        if not isinstance(answer, dict):
            raise MalformedAnswer('Each answer must include questionId and selectedOptionId')

        missing = [
            field for field in ('questionId', 'selectedOptionId')
            if answer.get(field) is None or answer.get(field) == ''
        ]
        if missing:
            raise MalformedAnswer(
                f"Each answer must include questionId and selectedOptionId (missing: {', '.join(missing)})"
            )

        return (
            parse_identifier(answer['questionId'], 'questionId'),
            parse_identifier(answer['selectedOptionId'], 'selectedOptionId'),
        )


def submit_quiz_answers(storage: StorageContext, quiz_id: int, answers) -> ScoreResult:
    """
    Load a quiz and score a batch of answers against it.

    Raises:
        QuizNotFound: before any transactional work if the quiz does not exist
    """
    quiz = storage.get_quiz(quiz_id)
    if quiz is None:
        raise QuizNotFound(quiz_id)
    return SubmissionScorer(storage).submit(quiz, answers)
