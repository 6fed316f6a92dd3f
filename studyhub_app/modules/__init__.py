"""Feature modules, each exposing a blueprint."""
