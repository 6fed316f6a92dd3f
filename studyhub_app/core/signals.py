"""
Central signal registry.

Uses blinker namespaces so modules can react to each other's events without
importing each other.

Usage:
    # Publisher
    from studyhub_app.core.signals import quiz_submitted
    quiz_submitted.send(None, quiz_id=1, user_id=2, result=result)

    # Subscriber
    @quiz_submitted.connect
    def on_quiz_submitted(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Quiz Signals
# ============================================
quiz_signals = Namespace()

# Fired once per play session, at the moment it transitions to submitted.
# Payload: quiz_id, user_id, result (ScoreResult), trigger ('manual' | 'timer')
quiz_submitted = quiz_signals.signal('quiz_submitted')

# Fired after an attempt row was committed.
# Payload: attempt_id, quiz_id, user_id, score, max_score
quiz_attempt_recorded = quiz_signals.signal('quiz_attempt_recorded')

# ============================================
# Content Signals
# ============================================
content_signals = Namespace()

# Fired when a quiz, summary module or deck is created.
# Payload: user_id, content_type ('quiz', 'summary_module', 'deck'), content_id, title
content_created = content_signals.signal('content_created')
