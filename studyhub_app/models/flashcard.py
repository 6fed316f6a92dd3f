"""Flashcard decks."""

from __future__ import annotations

from sqlalchemy.sql import func

from ..db_instance import db


class Deck(db.Model):
    """A deck of flashcards."""

    __tablename__ = 'decks'

    deck_id = db.Column(db.Integer, primary_key=True)
    creator_user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    cards = db.relationship(
        'Flashcard',
        backref='deck',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='Flashcard.position',
    )

    @property
    def progress(self) -> int:
        """Share of cards marked as known, in whole percent."""
        if not self.cards:
            return 0
        known = sum(1 for card in self.cards if card.status == Flashcard.STATUS_KNOWN)
        return round(known * 100 / len(self.cards))

    def to_dict(self, include_cards: bool = False) -> dict[str, object]:
        data = {
            'id': self.deck_id,
            'title': self.title,
            'card_count': len(self.cards),
            'progress': self.progress,
        }
        if include_cards:
            data['cards'] = [card.to_dict() for card in self.cards]
        return data


class Flashcard(db.Model):
    """A front/back card with the learner's last self-assessment."""

    __tablename__ = 'flashcards'

    STATUS_NEW = 'new'
    STATUS_KNOWN = 'known'
    STATUS_UNKNOWN = 'unknown'
    STATUSES = (STATUS_NEW, STATUS_KNOWN, STATUS_UNKNOWN)

    card_id = db.Column(db.Integer, primary_key=True)
    deck_id = db.Column(db.Integer, db.ForeignKey('decks.deck_id'), nullable=False)
    front = db.Column(db.Text, nullable=False)
    back = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_NEW)
    position = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.card_id,
            'front': self.front,
            'back': self.back,
            'status': self.status,
        }
