import time

from codewords import db


class SessionRecord(db.Model):
    """One serialized game session, stored under its room key."""

    __tablename__ = 'session_record'
    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    expires_at = db.Column(db.Float, nullable=False, index=True)
    updated_at = db.Column(db.Float, nullable=False)

    def is_expired(self, now=None):
        return self.expires_at <= (now if now is not None else time.time())
