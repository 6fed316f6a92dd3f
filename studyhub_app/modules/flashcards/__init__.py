"""Flashcards module: decks, cards and sequential study runs."""

module_metadata = {
    'name': 'Karteikarten',
    'category': 'Learning',
    'url_prefix': '/flashcards',
    'enabled': True,
}
