# File: studyhub_app/modules/flashcards/routes.py
# Purpose: JSON endpoints for decks, cards and study runs.

from flask import Blueprint, current_app, request
from flask_login import current_user, login_required

from ...core.error_handlers import AuthorizationError, NotFoundError, success_response
from ...core.signals import content_created
from ...models import Deck, Flashcard, db
from ...utils.forms import json_form, validate_or_raise
from .forms import DeckForm, FlashcardForm
from .logics.deck_session import DeckSessionManager

flashcards_bp = Blueprint('flashcards', __name__)


def _get_deck_or_404(deck_id):
    deck = db.session.get(Deck, deck_id)
    if deck is None:
        raise NotFoundError('Deck not found', resource='deck')
    return deck


@flashcards_bp.route('/api/decks', methods=['GET'])
def list_decks():
    decks = Deck.query.order_by(Deck.created_at.desc(), Deck.deck_id.desc()).all()
    return success_response(data=[deck.to_dict() for deck in decks])


@flashcards_bp.route('/api/decks', methods=['POST'])
@login_required
def create_deck():
    form = json_form(DeckForm)
    validate_or_raise(form)

    deck = Deck(creator_user_id=current_user.user_id, title=form.title.data.strip())
    db.session.add(deck)
    db.session.commit()

    current_app.logger.info(f"Deck created: {deck.title} ({deck.deck_id})")
    try:
        content_created.send(
            current_app._get_current_object(),
            user_id=current_user.user_id,
            content_type='deck',
            content_id=deck.deck_id,
            title=deck.title,
        )
    except Exception as e:
        current_app.logger.error(f"Error emitting content_created signal: {e}")
    return success_response(data=deck.to_dict(include_cards=True), message='Deck erstellt.', status_code=201)


@flashcards_bp.route('/api/decks/<int:deck_id>', methods=['GET'])
def get_deck(deck_id):
    return success_response(data=_get_deck_or_404(deck_id).to_dict(include_cards=True))


@flashcards_bp.route('/api/decks/<int:deck_id>/cards', methods=['POST'])
@login_required
def add_card(deck_id):
    """Append a card; only the deck's creator may add cards."""
    deck = _get_deck_or_404(deck_id)
    if deck.creator_user_id != current_user.user_id:
        raise AuthorizationError('Only the deck owner can add cards')

    form = json_form(FlashcardForm)
    validate_or_raise(form)

    position = max((card.position for card in deck.cards), default=-1) + 1
    card = Flashcard(deck_id=deck.deck_id, front=form.front.data, back=form.back.data, position=position)
    db.session.add(card)
    db.session.commit()
    return success_response(data=card.to_dict(), status_code=201)


# ---------------------------------------------------------------------------
# Study run
# ---------------------------------------------------------------------------

@flashcards_bp.route('/api/decks/<int:deck_id>/study', methods=['POST'])
@login_required
def start_study(deck_id):
    manager = DeckSessionManager.start(_get_deck_or_404(deck_id))
    return success_response(data=manager.state(), status_code=201)


@flashcards_bp.route('/api/study', methods=['GET'])
@login_required
def study_state():
    return success_response(data=DeckSessionManager.load().state())


@flashcards_bp.route('/api/study/result', methods=['POST'])
@login_required
def study_result():
    data = request.get_json(silent=True) or {}
    result = data.get('result') if isinstance(data, dict) else None
    manager = DeckSessionManager.load().record_result(result)
    return success_response(data=manager.state())


@flashcards_bp.route('/api/study/restart', methods=['POST'])
@login_required
def study_restart():
    return success_response(data=DeckSessionManager.load().restart().state())


@flashcards_bp.route('/api/study', methods=['DELETE'])
@login_required
def study_end():
    DeckSessionManager.clear()
    return success_response(message='Lernsitzung beendet.')
