"""Quiz authoring and read operations."""
from quizapp.common.errors import QuizNotFound
from quizapp.common.storage import StorageContext
from quizapp.quiz.models import Quiz, Question, Option
from quizapp.quiz.validators import QuizValidator


class QuizService:
    """Service class for creating and reading quizzes and their submissions."""

    @staticmethod
    def create_quiz(storage: StorageContext, payload: dict) -> Quiz:
        """
        Validate and create a quiz with its questions and options.

        Every check runs before the first row is written. Rows are then
        created quiz first, then each question followed by its options,
        and committed together.

        Args:
            storage: Storage context for this request
            payload: ``{title, theme, questions: [{text, options: [{text, isCorrect}]}]}``

        Returns:
            The committed quiz, re-read with its questions and options
        """
        QuizValidator.validate(payload)

        with storage.transaction() as session:
            quiz = Quiz(title=payload['title'].strip(), theme=payload['theme'].strip())
            session.add(quiz)
            session.flush()

            for question_data in payload['questions']:
                question = Question(text=question_data['text'].strip(), quiz_id=quiz.id)
                session.add(question)
                session.flush()

                for option_data in question_data['options']:
                    session.add(Option(
                        text=option_data['text'].strip(),
                        is_correct=option_data.get('isCorrect') is True,
                        question_id=question.id,
                    ))
            session.flush()
            quiz_id = quiz.id

        return QuizService.get_quiz(storage, quiz_id)

    @staticmethod
    def get_quiz(storage: StorageContext, quiz_id: int) -> Quiz:
        """Fetch a hydrated quiz or raise QuizNotFound."""
        quiz = storage.get_quiz(quiz_id)
        if quiz is None:
            raise QuizNotFound(quiz_id)
        return quiz

    @staticmethod
    def list_quizzes(storage: StorageContext) -> list:
        return storage.list_quizzes()

    @staticmethod
    def list_submissions(storage: StorageContext, quiz_id: int) -> list:
        """All submissions for a quiz with their answers; empty list when none exist."""
        return storage.list_submissions(quiz_id)
