import pytest

from logic import grade, COMPLIANCE, CONCERN, WEAKNESS, DEFICIENCY


@pytest.mark.parametrize('no_count, expected', [
    (0, COMPLIANCE),
    (1, CONCERN),
    (2, DEFICIENCY),
    (3, DEFICIENCY),
    (4, DEFICIENCY),
])
def test_must_scope_with_four_questions(no_count, expected):
    assert grade(no_count, 4, 'must') == expected


@pytest.mark.parametrize('no_count, expected', [
    (0, COMPLIANCE),
    (1, COMPLIANCE),
    (2, CONCERN),
    (3, WEAKNESS),
    (4, WEAKNESS),
])
def test_should_scope_with_four_questions(no_count, expected):
    assert grade(no_count, 4, 'should') == expected


def test_must_weakness_lies_strictly_between_quarter_and_half():
    # 1/3 is above 0.25 but below 0.5
    assert grade(1, 3, 'must') == WEAKNESS
    assert grade(4, 10, 'must') == WEAKNESS


def test_empty_scope_is_compliance():
    assert grade(0, 0, 'must') == COMPLIANCE
    assert grade(0, 0, 'should') == COMPLIANCE


def test_strictness_defaults_to_must():
    assert grade(2, 4) == DEFICIENCY


def test_unknown_strictness_is_rejected():
    with pytest.raises(ValueError):
        grade(1, 4, 'may')
