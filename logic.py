from flask import current_app
from sqlalchemy import case, func

from criteria_template import STRICTNESS_MUST, STRICTNESS_SHOULD
from errors import NotFoundError, ValidationError
from extensions import db
from models import Evaluation, Criterion, SubCriterion, Response, utcnow
from models.response import ANSWERS

COMPLIANCE = 'Compliance'
CONCERN = 'Concern'
WEAKNESS = 'Weakness'
DEFICIENCY = 'Deficiency'

COMPLETED_STATUS = 'Completed'


def grade(no_count, total, strictness=STRICTNESS_MUST):
    """
    Suggests an evaluation label from the share of "No" answers in a scope.

    A scope with no questions is graded Compliance. The result is advisory:
    reviewers may store any label they like.
    """
    if strictness not in (STRICTNESS_MUST, STRICTNESS_SHOULD):
        raise ValueError(f'Unknown strictness: {strictness!r}')
    if total <= 0:
        return COMPLIANCE

    ratio = no_count / total
    if strictness == STRICTNESS_MUST:
        if ratio >= 0.5:
            return DEFICIENCY
        if ratio > 0.25:
            return WEAKNESS
        if ratio > 0:
            return CONCERN
        return COMPLIANCE

    if ratio >= 0.75:
        return WEAKNESS
    if ratio >= 0.5:
        return CONCERN
    return COMPLIANCE


SQLITE_INT_MIN = -2 ** 63
SQLITE_INT_MAX = 2 ** 63 - 1


def as_int(value):
    # Ids and indexes come straight from the URL; garbage matches nothing
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    # Out of range for an SQLite INTEGER, so no row can have it
    if not SQLITE_INT_MIN <= number <= SQLITE_INT_MAX:
        return None
    return number


def touch_evaluation(evaluation_id):
    Evaluation.query.filter_by(id=evaluation_id).update(
        {'updated_at': utcnow()}, synchronize_session=False
    )


def list_evaluations():
    completed = func.count(case((Criterion.status == COMPLETED_STATUS, 1)))
    rows = db.session.query(
        Evaluation,
        completed.label('completed_criteria'),
        func.count(Criterion.id).label('total_criteria')
    ).outerjoin(
        Criterion, Criterion.evaluation_id == Evaluation.id
    ).group_by(
        Evaluation.id
    ).order_by(
        Evaluation.updated_at.desc(), Evaluation.id.desc()
    ).all()

    result = []
    for evaluation, completed_criteria, total_criteria in rows:
        item = evaluation.to_dict()
        item['completed_criteria'] = completed_criteria
        item['total_criteria'] = total_criteria
        result.append(item)
    return result


def create_evaluation(program_name, university_name, template):
    """
    Creates an evaluation together with its criteria/sub-criteria skeleton,
    copied from the template. No responses are written.
    """
    if not _non_empty(program_name) or not _non_empty(university_name):
        raise ValidationError('Program name and university name are required')

    evaluation = Evaluation(program_name=program_name.strip(), university_name=university_name.strip())
    for criterion_index, template_criterion in enumerate(template.criteria):
        criterion = Criterion(criterion_index=criterion_index, title=template_criterion['title'])
        for sub_index, template_sub in enumerate(template_criterion['sub_criteria']):
            criterion.sub_criteria.append(
                SubCriterion(sub_criterion_index=sub_index, text=template_sub['text'])
            )
        evaluation.criteria.append(criterion)

    # One commit: the skeleton is written completely or not at all
    db.session.add(evaluation)
    db.session.commit()

    current_app.logger.info(
        'Evaluation %s created for "%s" (%s) with %d criteria',
        evaluation.id, evaluation.program_name, evaluation.university_name, len(template)
    )
    return evaluation


def _non_empty(value):
    return isinstance(value, str) and value.strip() != ''


def load_evaluation_document(evaluation_id, template):
    """
    Builds the nested evaluation document the frontend renders.

    Rows of the criteria/sub-criteria/responses join are folded into
    index -> node mappings, question slots the template declares but that
    have no stored answer are filled with None, and every mapping is then
    flattened into a list whose gaps are None.
    """
    evaluation_id = as_int(evaluation_id)
    evaluation = db.session.get(Evaluation, evaluation_id) if evaluation_id is not None else None
    if evaluation is None:
        raise NotFoundError('Evaluation not found')

    rows = db.session.query(
        Criterion.criterion_index,
        Criterion.title,
        Criterion.status,
        Criterion.evaluation,
        Criterion.justification,
        SubCriterion.id.label('sc_id'),
        SubCriterion.sub_criterion_index,
        SubCriterion.text.label('sc_text'),
        SubCriterion.evaluation.label('sc_evaluation'),
        Response.question_index,
        Response.response
    ).select_from(
        Criterion
    ).outerjoin(
        SubCriterion, SubCriterion.criterion_id == Criterion.id
    ).outerjoin(
        Response, Response.sub_criterion_id == SubCriterion.id
    ).filter(
        Criterion.evaluation_id == evaluation.id
    ).order_by(
        Criterion.criterion_index, SubCriterion.sub_criterion_index, Response.question_index
    ).all()

    criteria = fold_rows(rows)
    fill_missing_responses(criteria, template)

    document = evaluation.to_dict()
    document['criteria'] = flatten_criteria(criteria)
    return document


def fold_rows(rows):
    criteria = {}
    for row in rows:
        criterion = criteria.get(row.criterion_index)
        if criterion is None:
            criterion = criteria[row.criterion_index] = {
                'title': row.title,
                'status': row.status,
                'evaluation': row.evaluation,
                'justification': row.justification,
                'sub_criteria': {},
            }

        # Criterion without sub-criteria
        if row.sc_id is None:
            continue

        sub = criterion['sub_criteria'].get(row.sub_criterion_index)
        if sub is None:
            sub = criterion['sub_criteria'][row.sub_criterion_index] = {
                'text': row.sc_text,
                'evaluation': row.sc_evaluation,
                'responses': {},
            }

        if row.question_index is not None:
            sub['responses'][row.question_index] = row.response
    return criteria


def fill_missing_responses(criteria, template):
    for criterion_index, criterion in criteria.items():
        template_criterion = template.criterion(criterion_index)
        if template_criterion is None:
            continue
        for sub_index, template_sub in enumerate(template_criterion['sub_criteria']):
            sub = criterion['sub_criteria'].get(sub_index)
            if sub is None:
                continue
            for question_index in range(len(template_sub['questions'])):
                sub['responses'].setdefault(question_index, None)


def to_sequence(nodes):
    if not nodes:
        return []
    return [nodes.get(i) for i in range(max(nodes) + 1)]


def flatten_criteria(criteria):
    flat = {}
    for criterion_index, criterion in criteria.items():
        sub_criteria = {
            sub_index: dict(sub, responses=to_sequence(sub['responses']))
            for sub_index, sub in criterion['sub_criteria'].items()
        }
        flat[criterion_index] = dict(criterion, sub_criteria=to_sequence(sub_criteria))
    return to_sequence(flat)


def update_criterion(evaluation_id, criterion_index, status, evaluation, justification):
    """
    Overwrites a criterion's status, label and justification and returns the
    number of rows changed. Nothing matching is not an error.
    """
    evaluation_id = as_int(evaluation_id)
    criterion_index = as_int(criterion_index)
    if evaluation_id is None or criterion_index is None:
        return 0

    changes = Criterion.query.filter_by(
        evaluation_id=evaluation_id, criterion_index=criterion_index
    ).update({
        'status': status,
        'evaluation': evaluation,
        'justification': justification,
    }, synchronize_session=False)
    touch_evaluation(evaluation_id)
    db.session.commit()

    if not changes:
        current_app.logger.warning(
            'Criterion %s of evaluation %s not found, nothing updated', criterion_index, evaluation_id
        )
    return changes


def find_sub_criterion(evaluation_id, criterion_index, sub_index):
    evaluation_id = as_int(evaluation_id)
    criterion_index = as_int(criterion_index)
    sub_index = as_int(sub_index)
    if evaluation_id is None or criterion_index is None or sub_index is None:
        return None

    return SubCriterion.query.join(
        Criterion, SubCriterion.criterion_id == Criterion.id
    ).filter(
        Criterion.evaluation_id == evaluation_id,
        Criterion.criterion_index == criterion_index,
        SubCriterion.sub_criterion_index == sub_index
    ).first()


def update_sub_criterion(evaluation_id, criterion_index, sub_index, evaluation, responses, template):
    """
    Sets a sub-criterion's label and replaces its whole response set.

    ``responses`` is positional: entry i answers question i. None entries are
    not stored, so a previously answered question sent as None is cleared.
    Answers past the template's question count for the sub-criterion are
    rejected, so stored data never outgrows the template.
    """
    if not isinstance(responses, list):
        raise ValidationError('responses must be a list')
    invalid = [r for r in responses if r is not None and r not in ANSWERS]
    if invalid:
        raise ValidationError(f'responses may only contain "Yes", "No" or null, got {invalid[0]!r}')

    sub_criterion = find_sub_criterion(evaluation_id, criterion_index, sub_index)
    if sub_criterion is None:
        raise NotFoundError('Sub-criterion not found')

    question_count = template.question_count(
        sub_criterion.criterion.criterion_index, sub_criterion.sub_criterion_index
    )
    if question_count is not None and any(answer is not None for answer in responses[question_count:]):
        raise ValidationError(f'This sub-criterion has only {question_count} questions')

    sub_criterion.evaluation = evaluation
    Response.query.filter_by(sub_criterion_id=sub_criterion.id).delete(synchronize_session=False)
    db.session.add_all([
        Response(sub_criterion_id=sub_criterion.id, question_index=question_index, response=answer)
        for question_index, answer in enumerate(responses)
        if answer is not None
    ])
    touch_evaluation(as_int(evaluation_id))
    db.session.commit()
    return sub_criterion


def suggest_grades(document, template):
    """Suggested labels for every criterion and sub-criterion of a document."""
    grades = []
    for criterion_index, criterion in enumerate(document['criteria']):
        if criterion is None:
            grades.append(None)
            continue

        strictness = template.strictness(criterion_index) or STRICTNESS_MUST
        total_questions = 0
        total_no = 0
        sub_grades = []
        for sub_index, sub in enumerate(criterion['sub_criteria']):
            if sub is None:
                sub_grades.append(None)
                continue
            question_count = template.question_count(criterion_index, sub_index)
            if question_count is None:
                question_count = len(sub['responses'])
            no_count = sum(1 for answer in sub['responses'] if answer == 'No')
            total_questions += question_count
            total_no += no_count
            sub_grades.append({
                'evaluation': grade(no_count, question_count, strictness),
                'no_count': no_count,
                'question_count': question_count,
            })

        grades.append({
            'type': strictness,
            'evaluation': grade(total_no, total_questions, strictness),
            'no_count': total_no,
            'question_count': total_questions,
            'sub_criteria': sub_grades,
        })
    return grades
