"""Summaries module: structured study summaries with PDF attachments."""

module_metadata = {
    'name': 'Zusammenfassungen',
    'category': 'Learning',
    'url_prefix': '/summaries',
    'enabled': True,
}
