"""
Error taxonomy for quiz authoring and submission scoring.

Every error carries the HTTP status it maps to. Routes raise these and the
quiz blueprint's error handler turns them into ``{success: false, error}``
responses.
"""


class QuizAppError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code = 400

    def __init__(self, message, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> tuple:
        """Return the JSON payload and status code for this error."""
        return {'success': False, 'error': self.message}, self.status_code


class InvalidQuizShape(QuizAppError):
    """Quiz question count outside the allowed range."""

    def __init__(self, message: str = "Quiz must contain between 3 and 10 questions"):
        super().__init__(message)


class InvalidQuestionShape(QuizAppError):
    """A question's options are out of range or do not have exactly one correct answer."""

    def __init__(self, position: int, reason: str):
        super().__init__(f"Question {position} {reason}")
        self.position = position


class FieldValidation(QuizAppError):
    """One or more text fields are empty; ``message`` is the list of field messages."""

    def __init__(self, messages: list):
        super().__init__(list(messages))

    def __str__(self):
        return "; ".join(self.message)


class QuizNotFound(QuizAppError):
    status_code = 404

    def __init__(self, quiz_id=None):
        super().__init__("Quiz not found")
        self.quiz_id = quiz_id


class MalformedSubmission(QuizAppError):
    def __init__(self, message: str = "Answers must be provided as an array"):
        super().__init__(message)


class MalformedAnswer(QuizAppError):
    pass


class DuplicateAnswer(QuizAppError):
    def __init__(self, question_id):
        super().__init__(f"Duplicate answer for question {question_id}")
        self.question_id = question_id


class UnknownQuestion(QuizAppError):
    def __init__(self, question_id):
        super().__init__(f"Question with id {question_id} not found in this quiz")
        self.question_id = question_id


class UnknownOption(QuizAppError):
    def __init__(self, option_id, question_id):
        super().__init__(f"Option with id {option_id} not found in question {question_id}")
        self.option_id = option_id
        self.question_id = question_id


class StorageError(QuizAppError):
    """Datastore failure. The original error is logged, clients only see 'Server Error'."""

    status_code = 500

    def __init__(self, detail: str = ""):
        super().__init__("Server Error")
        self.detail = detail

    def __str__(self):
        return self.detail or self.message
