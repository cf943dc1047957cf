# models/response.py

from extensions import db
from sqlalchemy import CheckConstraint

ANSWERS = ('Yes', 'No')


class Response(db.Model):
    __tablename__ = 'responses'
    id = db.Column(db.Integer, primary_key=True)
    sub_criterion_id = db.Column(db.Integer, db.ForeignKey('sub_criteria.id'), nullable=False)
    question_index = db.Column(db.Integer, nullable=False)
    # Unanswered questions have no row at all
    response = db.Column(db.String(3), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('sub_criterion_id', 'question_index', name='unique_sub_criterion_question'),
        CheckConstraint("response IN ('Yes', 'No')", name="check_response"),
        CheckConstraint("question_index >= 0", name="check_question_index"),
    )
