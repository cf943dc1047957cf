# models/criterion.py

from extensions import db

DEFAULT_STATUS = 'Not Started'


class Criterion(db.Model):
    __tablename__ = 'criteria'
    id = db.Column(db.Integer, primary_key=True)
    evaluation_id = db.Column(db.Integer, db.ForeignKey('evaluations.id'), nullable=False)
    criterion_index = db.Column(db.Integer, nullable=False)
    title = db.Column(db.String, nullable=False)
    status = db.Column(db.String, nullable=True, default=DEFAULT_STATUS)
    # Free-text label chosen by the reviewer, e.g. 'Compliance'
    evaluation = db.Column(db.String, nullable=True)
    justification = db.Column(db.Text, nullable=True)

    sub_criteria = db.relationship(
        'SubCriterion',
        backref='criterion',
        lazy=True,
        order_by='SubCriterion.sub_criterion_index'
    )

    __table_args__ = (
        db.UniqueConstraint('evaluation_id', 'criterion_index', name='unique_evaluation_criterion'),
    )
