"""
Test cases for the submission scoring engine.
"""
from types import SimpleNamespace

import pytest

from conftest import make_quiz_payload
from quizapp.common.errors import (
    InvalidQuizShape,
    MalformedSubmission,
    MalformedAnswer,
    DuplicateAnswer,
    UnknownQuestion,
    UnknownOption,
    QuizNotFound,
)
from quizapp.quiz.models import QuizSubmission, UserAnswer
from quizapp.quiz.scoring import ScoreResult, SubmissionScorer, submit_quiz_answers
from quizapp.quiz.service import QuizService


def correct_option(question):
    return next(opt for opt in question.options if opt.is_correct)


def wrong_option(question):
    return next(opt for opt in question.options if not opt.is_correct)


def answer(question, option):
    return {'questionId': question.id, 'selectedOptionId': option.id}


@pytest.fixture
def quiz(storage):
    return QuizService.create_quiz(storage, make_quiz_payload())


def row_counts(storage):
    return (
        storage.session.query(QuizSubmission).count(),
        storage.session.query(UserAnswer).count(),
    )


class TestScoreResult:
    """Score formatting and rounding."""

    def test_two_of_three(self):
        result = ScoreResult(2, 3, 9)
        assert result.to_dict() == {'score': '2/3', 'percentage': 67, 'submissionId': 9}

    def test_half_rounds_up(self):
        assert ScoreResult(1, 8, 1).percentage == 13  # 12.5
        assert ScoreResult(5, 8, 1).percentage == 63  # 62.5

    def test_zero_and_full(self):
        assert ScoreResult(0, 4, 1).percentage == 0
        assert ScoreResult(4, 4, 1).percentage == 100


class TestSubmissionScorer:
    """Scoring and persistence of answer batches."""

    def test_scores_correct_answers(self, storage, quiz):
        q1, q2, q3 = quiz.questions
        result = SubmissionScorer(storage).submit(quiz, [
            answer(q1, correct_option(q1)),
            answer(q2, wrong_option(q2)),
            answer(q3, correct_option(q3)),
        ])
        assert result.to_dict()['score'] == '2/3'
        assert result.percentage == 67

        submission = storage.session.get(QuizSubmission, result.submission_id)
        assert submission.score == 2
        assert submission.total_questions == 3
        assert submission.quiz_id == quiz.id
        assert [(a.question_id, a.selected_option_id) for a in submission.answers] == [
            (q1.id, correct_option(q1).id),
            (q2.id, wrong_option(q2).id),
            (q3.id, correct_option(q3).id),
        ]

    def test_unanswered_questions_are_not_errors(self, storage, quiz):
        q1 = quiz.questions[0]
        result = SubmissionScorer(storage).submit(quiz, [answer(q1, correct_option(q1))])
        assert result.to_dict()['score'] == '1/3'
        assert row_counts(storage) == (1, 1)

    def test_empty_answer_list_scores_zero(self, storage, quiz):
        result = SubmissionScorer(storage).submit(quiz, [])
        assert result.to_dict()['score'] == '0/3'
        assert result.percentage == 0
        assert row_counts(storage) == (1, 0)

    def test_string_ids_are_accepted(self, storage, quiz):
        q1 = quiz.questions[0]
        result = SubmissionScorer(storage).submit(quiz, [
            {'questionId': str(q1.id), 'selectedOptionId': str(correct_option(q1).id)}
        ])
        assert result.score == 1

    @pytest.mark.parametrize('answers', [None, {'questionId': 1}, 'answers'])
    def test_answers_must_be_a_list(self, storage, quiz, answers):
        with pytest.raises(MalformedSubmission, match='Answers must be provided as an array'):
            SubmissionScorer(storage).submit(quiz, answers)
        assert row_counts(storage) == (0, 0)

    def test_missing_field_rolls_back(self, storage, quiz):
        q1 = quiz.questions[0]
        with pytest.raises(MalformedAnswer, match='missing: selectedOptionId'):
            SubmissionScorer(storage).submit(quiz, [
                answer(q1, correct_option(q1)),
                {'questionId': quiz.questions[1].id},
            ])
        assert row_counts(storage) == (0, 0)

    def test_non_numeric_id_is_malformed(self, storage, quiz):
        with pytest.raises(MalformedAnswer, match='questionId must be a numeric id'):
            SubmissionScorer(storage).submit(quiz, [{'questionId': 'one', 'selectedOptionId': 1}])
        assert row_counts(storage) == (0, 0)

    def test_unknown_question_rolls_back(self, storage, quiz):
        q1 = quiz.questions[0]
        with pytest.raises(UnknownQuestion) as exc:
            SubmissionScorer(storage).submit(quiz, [
                answer(q1, correct_option(q1)),
                {'questionId': 9999, 'selectedOptionId': 1},
            ])
        assert exc.value.message == 'Question with id 9999 not found in this quiz'
        assert row_counts(storage) == (0, 0)

    def test_duplicate_answer_rolls_back(self, storage, quiz):
        q1 = quiz.questions[0]
        with pytest.raises(DuplicateAnswer) as exc:
            SubmissionScorer(storage).submit(quiz, [
                answer(q1, correct_option(q1)),
                answer(q1, wrong_option(q1)),
            ])
        assert exc.value.message == f'Duplicate answer for question {q1.id}'
        assert row_counts(storage) == (0, 0)

    def test_duplicate_detected_across_id_types(self, storage, quiz):
        q1 = quiz.questions[0]
        with pytest.raises(DuplicateAnswer):
            SubmissionScorer(storage).submit(quiz, [
                answer(q1, correct_option(q1)),
                {'questionId': str(q1.id), 'selectedOptionId': correct_option(q1).id},
            ])

    def test_option_from_another_question_is_unknown(self, storage, quiz):
        q1, q2 = quiz.questions[:2]
        with pytest.raises(UnknownOption) as exc:
            SubmissionScorer(storage).submit(quiz, [answer(q1, correct_option(q2))])
        assert exc.value.message == (
            f'Option with id {correct_option(q2).id} not found in question {q1.id}'
        )
        assert row_counts(storage) == (0, 0)

    def test_failed_submission_leaves_earlier_submissions(self, storage, quiz):
        q1 = quiz.questions[0]
        SubmissionScorer(storage).submit(quiz, [answer(q1, correct_option(q1))])
        with pytest.raises(DuplicateAnswer):
            SubmissionScorer(storage).submit(quiz, [answer(q1, correct_option(q1))] * 2)
        assert row_counts(storage) == (1, 1)


class TestDecoupledStructure:
    """The engine only relies on the quiz's shape, not on ORM objects."""

    def build_quiz(self, question_count):
        questions = [
            SimpleNamespace(id=100 + i, options=[
                SimpleNamespace(id=1000 + 10 * i, is_correct=True),
                SimpleNamespace(id=1001 + 10 * i, is_correct=False),
            ])
            for i in range(question_count)
        ]
        return SimpleNamespace(id=42, questions=questions)

    @pytest.mark.parametrize('count', [0, 2, 11])
    def test_question_count_is_rechecked(self, storage, count):
        with pytest.raises(InvalidQuizShape, match='Quiz must contain between 3 and 10 questions'):
            SubmissionScorer(storage).submit(self.build_quiz(count), [])
        assert row_counts(storage) == (0, 0)

    def test_scores_plain_structure(self, storage):
        quiz = self.build_quiz(4)
        result = SubmissionScorer(storage).submit(quiz, [
            {'questionId': 100, 'selectedOptionId': 1000},
            {'questionId': 101, 'selectedOptionId': 1011},
            {'questionId': 103, 'selectedOptionId': 1030},
        ])
        assert result.to_dict()['score'] == '2/4'
        assert result.percentage == 50


class TestSubmitQuizAnswers:
    """Loading the quiz before scoring."""

    def test_missing_quiz(self, storage):
        with pytest.raises(QuizNotFound):
            submit_quiz_answers(storage, 12345, [])
        assert row_counts(storage) == (0, 0)

    def test_loads_and_scores(self, storage, quiz):
        q3 = quiz.questions[2]
        result = submit_quiz_answers(storage, quiz.id, [answer(q3, correct_option(q3))])
        assert result.to_dict()['score'] == '1/3'
