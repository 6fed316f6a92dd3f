"""Quiz module: quiz authoring, attempt history and timed play sessions."""

module_metadata = {
    'name': 'Quizzes',
    'category': 'Learning',
    'url_prefix': '/quizzes',
    'enabled': True,
}
