"""Auth module: registration, login and the current-user endpoint."""

module_metadata = {
    'name': 'Auth',
    'category': 'System',
    'url_prefix': '/auth',
    'enabled': True,
}
