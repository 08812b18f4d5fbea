"""
Quiz authoring routes.

- Create a quiz with its questions and options
- List all quizzes
- Fetch a single quiz
"""
from flask import jsonify, request, current_app
from quizapp.common.decorators import json_fields_required
from quizapp.common.errors import QuizAppError
from quizapp.common.event_logger import QuizEventLogger
from quizapp.common.storage import StorageContext
from quizapp.quiz import quiz_bp
from quizapp.quiz.service import QuizService


@quiz_bp.route('', methods=['POST'])
@json_fields_required('title', 'theme', lists=('questions',))
def create_quiz():
    """
    Create a new quiz.

    Request body:
    {
        "title": "Quiz Title",
        "theme": "Quiz Theme",
        "questions": [
            {"text": "Question", "options": [{"text": "Option", "isCorrect": true}, ...]},
            ...
        ]
    }
    """
    storage = StorageContext.from_app()
    data = request.get_json()

    try:
        quiz = QuizService.create_quiz(storage, data)
    except QuizAppError as e:
        if e.status_code < 500:
            QuizEventLogger.log_quiz_rejected(e.message)
        raise
    except Exception as e:
        storage.session.rollback()
        current_app.logger.exception(f"Error creating quiz: {str(e)}")
        return jsonify({'success': False, 'error': 'Server Error'}), 500

    QuizEventLogger.log_quiz_created(quiz.id, quiz.get_question_count())
    return jsonify({
        'success': True,
        'data': quiz.to_dict()
    }), 201


@quiz_bp.route('', methods=['GET'])
def list_quizzes():
    """List all quizzes with their questions and options."""
    quizzes = QuizService.list_quizzes(StorageContext.from_app())
    return jsonify({
        'success': True,
        'count': len(quizzes),
        'data': [quiz.to_dict() for quiz in quizzes]
    }), 200


@quiz_bp.route('/<int:quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    """Get a quiz including all questions and options."""
    quiz = QuizService.get_quiz(StorageContext.from_app(), quiz_id)
    return jsonify({
        'success': True,
        'data': quiz.to_dict()
    }), 200
