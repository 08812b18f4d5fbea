"""
Database models for quizzes and scored submissions.

A Quiz owns its Questions and each Question owns its Options; a
QuizSubmission owns its UserAnswers. Deleting an owner cascades to
everything beneath it.
"""
from datetime import datetime
from quizapp import db


def _isoformat(value):
    return value.isoformat() if value else None


class Quiz(db.Model):
    """A titled, themed set of multiple choice questions."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    theme = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    questions = db.relationship(
        "Question", backref="quiz", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Question.id"
    )

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_question_count(self) -> int:
        """Get total number of questions."""
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'theme': self.theme,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
            'questions': [q.to_dict() for q in self.questions],
        }


class Question(db.Model):
    """A single prompt belonging to one quiz."""
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    text = db.Column(db.String(1000), nullable=False)

    # Relationships
    options = db.relationship(
        "Option", backref="question", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Option.id"
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.text[:50]}>"

    def get_correct_option(self):
        """Return the option flagged correct, or None."""
        return next((opt for opt in self.options if opt.is_correct), None)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'text': self.text,
            'quizId': self.quiz_id,
            'options': [opt.to_dict() for opt in self.options],
        }


class Option(db.Model):
    """One selectable answer for a question."""
    __tablename__ = "options"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete='CASCADE'), nullable=False, index=True)
    text = db.Column(db.String(1000), nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Option {self.id}: {self.text[:50]}>"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'text': self.text,
            'isCorrect': self.is_correct,
            'questionId': self.question_id,
        }


class QuizSubmission(db.Model):
    """
    One respondent's scored attempt at a quiz.

    quiz_id is not a foreign key, so submissions remain when their
    quiz is deleted.
    """
    __tablename__ = "submissions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    total_questions = db.Column(db.Integer, nullable=False)
    submitted_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    answers = db.relationship(
        "UserAnswer", backref="submission", cascade="all, delete-orphan",
        passive_deletes=True, order_by="UserAnswer.id"
    )

    def __repr__(self) -> str:
        return f"<QuizSubmission {self.id}: Quiz {self.quiz_id}, {self.score}/{self.total_questions}>"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'quizId': self.quiz_id,
            'score': self.score,
            'totalQuestions': self.total_questions,
            'submittedAt': _isoformat(self.submitted_at),
            'answers': [a.to_dict() for a in self.answers],
        }


class UserAnswer(db.Model):
    """The option a respondent picked for one question of a submission."""
    __tablename__ = "answers"

    id = db.Column(db.Integer, primary_key=True)
    submission_id = db.Column(db.Integer, db.ForeignKey("submissions.id", ondelete='CASCADE'), nullable=False, index=True)
    question_id = db.Column(db.Integer, nullable=False)
    selected_option_id = db.Column(db.Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<UserAnswer {self.id}: Question {self.question_id} -> Option {self.selected_option_id}>"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'submissionId': self.submission_id,
            'questionId': self.question_id,
            'selectedOptionId': self.selected_option_id,
        }
