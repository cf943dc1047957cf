# seed_data.py
# Demo data for local development: `flask seed` or `python seed_data.py`

from flask import current_app

from criteria_template import get_template
from extensions import db
from models import Evaluation, Criterion, SubCriterion, Response
import logic

DEMO_PROGRAMS = [
    ('BSc in Computer Science and Engineering', 'Bangladesh University of Engineering and Technology'),
    ('BSc in Electrical and Electronic Engineering', 'Khulna University of Engineering & Technology'),
    ('BSc in Civil Engineering', 'Rajshahi University of Engineering & Technology'),
    ('BSc in Mechanical Engineering', 'Chittagong University of Engineering & Technology'),
]


def clear_data():
    # Reverse dependency order
    db.session.query(Response).delete()
    db.session.query(SubCriterion).delete()
    db.session.query(Criterion).delete()
    db.session.query(Evaluation).delete()
    db.session.commit()


def seed_demo_data(count=2):
    """
    Replaces all evaluations with ``count`` demo evaluations. The first one
    gets its first criterion fully answered, with every other question "No",
    and marked Completed.
    """
    template = get_template()
    current_app.logger.info('Clearing existing data...')
    clear_data()

    created = []
    try:
        for i in range(count):
            program_name, university_name = DEMO_PROGRAMS[i % len(DEMO_PROGRAMS)]
            created.append(logic.create_evaluation(program_name, university_name, template))

        first_criterion = template.criterion(0)
        if created and first_criterion is not None:
            evaluation_id = created[0].id
            for sub_index, sub in enumerate(first_criterion['sub_criteria']):
                answers = ['No' if q % 2 else 'Yes' for q in range(len(sub['questions']))]
                label = logic.grade(answers.count('No'), len(answers), template.strictness(0))
                logic.update_sub_criterion(evaluation_id, 0, sub_index, label, answers, template)
            logic.update_criterion(evaluation_id, 0, logic.COMPLETED_STATUS, None, 'Seeded demo data')
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Error while adding demo data')
        raise

    current_app.logger.info('Demo data added: %d evaluations', len(created))
    return created


if __name__ == '__main__':
    from app import create_app

    with create_app().app_context():
        seed_demo_data()
