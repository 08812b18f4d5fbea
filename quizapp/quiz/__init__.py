"""
Quiz module for authoring quizzes and scoring submissions.

Operators create multiple choice quizzes; respondents submit a batch of
answers which is scored and stored in one transaction.
"""
from flask import Blueprint, jsonify
from quizapp.config import config
from quizapp.common.errors import QuizAppError, StorageError
from quizapp.common.event_logger import QuizEventLogger

quiz_bp = Blueprint('quiz', __name__, url_prefix=config.API_PREFIX)


@quiz_bp.errorhandler(StorageError)
def handle_storage_error(error):
    QuizEventLogger.log_storage_error('request', error)
    payload, status = error.to_response()
    return jsonify(payload), status


@quiz_bp.errorhandler(QuizAppError)
def handle_quiz_error(error):
    payload, status = error.to_response()
    return jsonify(payload), status


from quizapp.quiz import quiz_routes  # noqa: E402,F401
from quizapp.quiz import submission_routes  # noqa: E402,F401
