"""Tidy Menu - ordonnancement, masquage et séparateurs du menu d'administration."""

__version__ = "1.4.0"
