"""Exceptions métier du moteur de configuration du menu."""
from __future__ import annotations


class MenuConfigError(RuntimeError):
    """Erreur générique pour les opérations de configuration du menu."""


class ValidationError(MenuConfigError):
    """Erreur déclenchée lorsqu'une donnée entrante n'a pas la forme attendue."""


class DecodeError(ValidationError):
    """Erreur déclenchée lorsqu'un document d'import ne peut pas être lu."""


class MalformedSyntaxError(DecodeError):
    """Le document d'import n'est pas un objet JSON valide."""


class MissingFieldsError(DecodeError):
    """Le document d'import ne contient pas les clés obligatoires."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Champs obligatoires manquants: {', '.join(self.missing)}")


class ScopeError(MenuConfigError):
    """Erreur déclenchée lorsqu'une portée (rôle) est inconnue ou invalide."""


class NoScopeError(ScopeError):
    """Aucune portée ne peut être déduite pour l'utilisateur courant."""


__all__ = [
    "DecodeError",
    "MalformedSyntaxError",
    "MenuConfigError",
    "MissingFieldsError",
    "NoScopeError",
    "ScopeError",
    "ValidationError",
]
