from types import SimpleNamespace

from criteria_template import CriteriaTemplate
from logic import fold_rows, fill_missing_responses, flatten_criteria, to_sequence, suggest_grades

from conftest import TEMPLATE


def row(criterion_index, sub_index=None, question_index=None, response=None, sc_id=None):
    return SimpleNamespace(
        criterion_index=criterion_index,
        title=f'C{criterion_index}',
        status='Not Started',
        evaluation=None,
        justification=None,
        sc_id=sc_id if sc_id is not None else (None if sub_index is None else 100 + sub_index),
        sub_criterion_index=sub_index,
        sc_text=None if sub_index is None else f'S{sub_index}',
        sc_evaluation=None,
        question_index=question_index,
        response=response,
    )


def test_to_sequence_fills_gaps_with_none():
    assert to_sequence({}) == []
    assert to_sequence({0: 'a', 2: 'c'}) == ['a', None, 'c']


def test_fold_rows_builds_nested_mappings():
    rows = [
        row(0, 0, 0, 'Yes'),
        row(0, 0, 3, 'No'),
        row(0, 1),
        row(1),
    ]

    criteria = fold_rows(rows)

    assert set(criteria) == {0, 1}
    assert criteria[0]['sub_criteria'][0]['responses'] == {0: 'Yes', 3: 'No'}
    assert criteria[0]['sub_criteria'][1]['responses'] == {}
    assert criteria[1]['sub_criteria'] == {}


def test_fill_missing_responses_pads_to_template_question_count():
    template = CriteriaTemplate(TEMPLATE)
    criteria = fold_rows([row(0, 0, 1, 'No'), row(0, 1), row(1, 0)])

    fill_missing_responses(criteria, template)
    flat = flatten_criteria(criteria)

    assert flat[0]['sub_criteria'][0]['responses'] == [None, 'No', None, None]
    assert flat[0]['sub_criteria'][1]['responses'] == [None, None]
    assert flat[1]['sub_criteria'][0]['responses'] == [None, None, None, None]


def test_stored_answers_beyond_template_are_kept():
    template = CriteriaTemplate(TEMPLATE)
    criteria = fold_rows([row(0, 1, 3, 'Yes')])

    fill_missing_responses(criteria, template)

    assert flatten_criteria(criteria)[0]['sub_criteria'][1]['responses'] == [None, None, None, 'Yes']


def test_criteria_missing_from_template_are_left_alone():
    criteria = fold_rows([row(0, 0, 1, 'Yes')])

    fill_missing_responses(criteria, CriteriaTemplate())

    assert flatten_criteria(criteria)[0]['sub_criteria'][0]['responses'] == [None, 'Yes']


def test_missing_criterion_positions_are_none():
    flat = flatten_criteria(fold_rows([row(2, 0)]))

    assert flat[:2] == [None, None]
    assert flat[2]['title'] == 'C2'


def test_suggest_grades_uses_template_strictness_and_counts():
    template = CriteriaTemplate(TEMPLATE)
    document = {'criteria': [
        {'sub_criteria': [
            {'responses': ['No', 'Yes', None, 'Yes']},
            {'responses': ['No', 'No']},
        ]},
        {'sub_criteria': [
            {'responses': ['No', 'No', 'No', 'Yes']},
        ]},
    ]}

    grades = suggest_grades(document, template)

    assert grades[0]['type'] == 'must'
    assert grades[0]['sub_criteria'][0]['evaluation'] == 'Concern'
    assert grades[0]['sub_criteria'][1]['evaluation'] == 'Deficiency'
    # 3 of 6 questions answered No
    assert grades[0]['no_count'] == 3
    assert grades[0]['question_count'] == 6
    assert grades[0]['evaluation'] == 'Deficiency'
    assert grades[1]['type'] == 'should'
    assert grades[1]['evaluation'] == 'Weakness'
