"""Damage claim reminder and notification service."""
