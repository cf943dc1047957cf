# models/evaluation.py

from datetime import datetime, timezone

from extensions import db


def utcnow():
    # Naive UTC, the way SQLite stores DateTime columns
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Evaluation(db.Model):
    __tablename__ = 'evaluations'
    id = db.Column(db.Integer, primary_key=True)
    program_name = db.Column(db.String, nullable=False)
    university_name = db.Column(db.String, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # No cascade: evaluations are never deleted
    criteria = db.relationship(
        'Criterion',
        backref='owner',
        lazy=True,
        order_by='Criterion.criterion_index'
    )

    def to_dict(self):
        return {
            'id': self.id,
            'program_name': self.program_name,
            'university_name': self.university_name,
            'created_at': format_timestamp(self.created_at),
            'updated_at': format_timestamp(self.updated_at),
        }


def format_timestamp(value):
    if value is None:
        return None
    return value.strftime('%Y-%m-%d %H:%M:%S')
