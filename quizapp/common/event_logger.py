"""
Quiz event logging module.

Records authoring and submission outcomes through the Flask app logger
so they show up alongside request logs.
"""

from flask import current_app, has_request_context, request


def _client() -> str:
    return request.remote_addr if has_request_context() else "-"


class QuizEventLogger:
    """
    Logger for quiz authoring and scoring events.
    """

    @staticmethod
    def log_quiz_created(quiz_id: int, question_count: int):
        """
        Log a committed quiz.

        Args:
            quiz_id: ID of the new quiz
            question_count: Number of questions it was created with
        """
        current_app.logger.info(
            f"QUIZ: Created - Quiz ID: {quiz_id}, "
            f"Questions: {question_count}, IP: {_client()}"
        )

    @staticmethod
    def log_quiz_rejected(reason):
        """
        Log a quiz creation request that failed validation.

        Args:
            reason: Error message or list of messages
        """
        current_app.logger.info(f"QUIZ: Creation rejected - Reason: {reason}, IP: {_client()}")

    @staticmethod
    def log_submission_scored(quiz_id: int, submission_id: int, score: int, total: int):
        current_app.logger.info(
            f"SUBMISSION: Scored - Quiz ID: {quiz_id}, Submission ID: {submission_id}, "
            f"Score: {score}/{total}, IP: {_client()}"
        )

    @staticmethod
    def log_submission_rejected(quiz_id: int, reason: str):
        """
        Log a submission that was rolled back.

        Args:
            quiz_id: Quiz the answers were submitted against
            reason: Validation message returned to the client
        """
        current_app.logger.warning(
            f"SUBMISSION: Rejected - Quiz ID: {quiz_id}, Reason: {reason}, IP: {_client()}"
        )

    @staticmethod
    def log_storage_error(operation: str, error: Exception):
        """
        Log a datastore failure with its traceback. Never returned to clients.

        Args:
            operation: Name of the operation that failed
            error: The exception raised
        """
        current_app.logger.error(
            f"STORAGE: {operation} failed - {error}, IP: {_client()}",
            exc_info=error,
        )
