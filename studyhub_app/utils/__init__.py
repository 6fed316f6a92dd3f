"""Shared helpers used across StudyHub modules."""
