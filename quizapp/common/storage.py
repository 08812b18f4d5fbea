"""
Storage context passed explicitly to every quiz and submission operation.

Wraps a SQLAlchemy session and owns the transaction boundary: a block run
under ``transaction()`` is committed when it finishes and rolled back on
any exception, validation failures included.
"""
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from quizapp.common.errors import StorageError

# Largest id a signed 64-bit INTEGER column can hold
MAX_ID = 2 ** 63 - 1


def _storable_id(value: int) -> bool:
    return 0 <= value <= MAX_ID


class StorageContext:
    """Per-request handle on the datastore."""

    def __init__(self, session):
        self.session = session

    @classmethod
    def from_app(cls) -> "StorageContext":
        """Build a context around the Flask-SQLAlchemy scoped session."""
        from quizapp import db
        return cls(db.session)

    @contextmanager
    def transaction(self):
        """
        Run a unit of work atomically.

        Yields:
            The session to write through

        Raises:
            StorageError: if the datastore rejects the work (after rollback)
        """
        try:
            yield self.session
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e
        except Exception:
            self.session.rollback()
            raise

    def get_quiz(self, quiz_id: int) -> Optional["Quiz"]:
        """Load a quiz with its questions and options, or None."""
        from quizapp.quiz.models import Quiz, Question

        if not _storable_id(quiz_id):
            return None
        try:
            return self.session.get(
                Quiz,
                quiz_id,
                options=[selectinload(Quiz.questions).selectinload(Question.options)],
                populate_existing=True,
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e

    def list_quizzes(self) -> list:
        from quizapp.quiz.models import Quiz, Question

        try:
            return (
                self.session.query(Quiz)
                .options(selectinload(Quiz.questions).selectinload(Question.options))
                .order_by(Quiz.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e

    def list_submissions(self, quiz_id: int) -> list:
        """Submissions for a quiz with their answers, in storage order."""
        from quizapp.quiz.models import QuizSubmission

        if not _storable_id(quiz_id):
            return []
        try:
            return (
                self.session.query(QuizSubmission)
                .options(selectinload(QuizSubmission.answers))
                .filter_by(quiz_id=quiz_id)
                .order_by(QuizSubmission.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e
