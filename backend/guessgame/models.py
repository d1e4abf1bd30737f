from guessgame import db

NAME_MAX_LENGTH = 64


class GameRecord(db.Model):
    __tablename__ = 'game_records'
    __table_args__ = (db.Index('ix_game_records_rank', 'attempts', 'time_seconds'),)
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    attempts = db.Column(db.Integer, nullable=False)
    time_seconds = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'attempts': self.attempts,
            'time_seconds': self.time_seconds,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<GameRecord {self.name!r} attempts={self.attempts} time={self.time_seconds}>"
