"""
Submission routes.

Respondents submit a batch of answers for scoring; operators list the
submissions made against a quiz.
"""
from flask import jsonify, request, current_app
from quizapp.common.errors import QuizAppError, QuizNotFound
from quizapp.common.event_logger import QuizEventLogger
from quizapp.common.storage import StorageContext
from quizapp.quiz import quiz_bp
from quizapp.quiz.scoring import submit_quiz_answers
from quizapp.quiz.service import QuizService


@quiz_bp.route('/<int:quiz_id>/submit', methods=['POST'])
def submit_quiz(quiz_id):
    """
    Submit answers to a quiz.

    Request body:
    {
        "answers": [{"questionId": 1, "selectedOptionId": 3}, ...]
    }
    Unanswered questions are simply left out of the list.
    """
    data = request.get_json(silent=True) or {}
    answers = data.get('answers') if isinstance(data, dict) else None
    storage = StorageContext.from_app()

    try:
        result = submit_quiz_answers(storage, quiz_id, answers)
    except QuizNotFound:
        raise
    except QuizAppError as e:
        if e.status_code < 500:
            QuizEventLogger.log_submission_rejected(quiz_id, e.message)
        raise
    except Exception as e:
        storage.session.rollback()
        current_app.logger.exception(f"Error submitting quiz answers: {str(e)}")
        return jsonify({'success': False, 'error': 'Server Error'}), 500

    QuizEventLogger.log_submission_scored(quiz_id, result.submission_id, result.score, result.total)
    return jsonify({
        'success': True,
        'data': result.to_dict()
    }), 201


@quiz_bp.route('/<int:quiz_id>/submissions', methods=['GET'])
def list_submissions(quiz_id):
    """List all submissions for a quiz, each with its answers."""
    submissions = QuizService.list_submissions(StorageContext.from_app(), quiz_id)
    return jsonify({
        'success': True,
        'count': len(submissions),
        'data': [submission.to_dict() for submission in submissions]
    }), 200
