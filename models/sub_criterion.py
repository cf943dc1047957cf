# models/sub_criterion.py

from extensions import db


class SubCriterion(db.Model):
    __tablename__ = 'sub_criteria'
    id = db.Column(db.Integer, primary_key=True)
    criterion_id = db.Column(db.Integer, db.ForeignKey('criteria.id'), nullable=False)
    sub_criterion_index = db.Column(db.Integer, nullable=False)
    text = db.Column(db.Text, nullable=False)
    evaluation = db.Column(db.String, nullable=True)

    responses = db.relationship(
        'Response',
        backref='sub_criterion',
        lazy=True,
        order_by='Response.question_index'
    )

    __table_args__ = (
        db.UniqueConstraint('criterion_id', 'sub_criterion_index', name='unique_criterion_sub_criterion'),
    )
