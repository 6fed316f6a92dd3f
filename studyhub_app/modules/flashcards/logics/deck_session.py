# File: studyhub_app/modules/flashcards/logics/deck_session.py
# Purpose: A sequential study run through one deck, kept in the Flask session.

from flask import current_app, session

from studyhub_app.core.error_handlers import NotFoundError, ValidationError
from studyhub_app.models import Flashcard, db

from ..config import FlashcardModuleDefaultConfig

RESULT_KNOWN = Flashcard.STATUS_KNOWN
RESULT_UNKNOWN = Flashcard.STATUS_UNKNOWN
RESULTS = (RESULT_KNOWN, RESULT_UNKNOWN)


class DeckSessionManager:
    """
    Walks the cards of a deck in order.

    Each result updates the card's stored status, bumps the tally and moves
    to the next card; the run is completed after the last card. The card ids
    are fixed when the run starts, so cards added later are not part of it.
    """
    SESSION_KEY = FlashcardModuleDefaultConfig.FLASHCARD_SESSION_KEY

    def __init__(self, deck_id, card_ids, current_index=0, known=0, unknown=0, completed=False):
        self.deck_id = deck_id
        self.card_ids = list(card_ids)
        self.current_index = current_index
        self.known = known
        self.unknown = unknown
        self.completed = completed or not self.card_ids

    @classmethod
    def start(cls, deck):
        manager = cls(deck.deck_id, [card.card_id for card in deck.cards])
        manager.save()
        current_app.logger.debug(f"Flashcard run started for deck {deck.deck_id} ({len(manager.card_ids)} cards)")
        return manager

    @classmethod
    def load(cls):
        data = session.get(cls.SESSION_KEY)
        if not data:
            raise NotFoundError('No active flashcard session', resource='flashcard_session')
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data):
        return cls(
            deck_id=data.get('deck_id'),
            card_ids=data.get('card_ids', []),
            current_index=data.get('current_index', 0),
            known=data.get('known', 0),
            unknown=data.get('unknown', 0),
            completed=data.get('completed', False),
        )

    def to_dict(self):
        return {
            'deck_id': self.deck_id,
            'card_ids': self.card_ids,
            'current_index': self.current_index,
            'known': self.known,
            'unknown': self.unknown,
            'completed': self.completed,
        }

    def save(self):
        session[self.SESSION_KEY] = self.to_dict()

    @classmethod
    def clear(cls):
        session.pop(cls.SESSION_KEY, None)

    def current_card(self):
        if self.completed:
            return None
        return db.session.get(Flashcard, self.card_ids[self.current_index])

    def record_result(self, result):
        """Store ``known``/``unknown`` for the current card and advance."""
        if result not in RESULTS:
            raise ValidationError('Result must be "known" or "unknown"', errors={'result': result})
        if self.completed:
            raise ValidationError('This flashcard session is already completed', code='SESSION_COMPLETED')

        card = self.current_card()
        if card is None:
            # The card was deleted during the run; skip it without counting.
            current_app.logger.warning(f"Flashcard {self.card_ids[self.current_index]} vanished during study run")
        else:
            card.status = result
            db.session.commit()
            if result == RESULT_KNOWN:
                self.known += 1
            else:
                self.unknown += 1

        if self.current_index < len(self.card_ids) - 1:
            self.current_index += 1
        else:
            self.completed = True
        self.save()
        return self

    def restart(self):
        self.current_index = 0
        self.known = 0
        self.unknown = 0
        self.completed = not self.card_ids
        self.save()
        return self

    def state(self):
        card = self.current_card()
        return {
            'deck_id': self.deck_id,
            'current_index': self.current_index,
            'total': len(self.card_ids),
            'card': card.to_dict() if card is not None else None,
            'results': {'known': self.known, 'unknown': self.unknown},
            'completed': self.completed,
        }
