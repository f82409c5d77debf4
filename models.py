from app import db
from datetime import datetime
import json


class StoredValue(db.Model):
    __tablename__ = 'stored_values'
    __table_args__ = (db.UniqueConstraint('scope', 'key', name='uq_stored_values_scope_key'),)
    id = db.Column(db.Integer, primary_key=True)
    scope = db.Column(db.String(64), nullable=False, index=True)  # session id
    key = db.Column(db.String(100), nullable=False)  # grewt-chat-history, grewt-health-timers
    value = db.Column(db.Text, nullable=False)  # JSON
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ScopedStore:
    """JSON key-value store for one session scope"""

    def __init__(self, scope):
        self.scope = scope

    def get(self, key, default=None):
        row = StoredValue.query.filter_by(scope=self.scope, key=key).first()
        if row is None:
            return default
        return json.loads(row.value)

    def set(self, key, value):
        row = StoredValue.query.filter_by(scope=self.scope, key=key).first()
        if row is None:
            row = StoredValue(scope=self.scope, key=key, value='')
            db.session.add(row)
        row.value = json.dumps(value)
        row.updated_at = datetime.utcnow()
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
