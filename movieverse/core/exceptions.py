"""
Taxonomie des erreurs du domaine MovieVerse.

Toutes les erreurs metier heritent de MovieVerseError. La couche web
traduit chaque famille en code HTTP (voir web/errors.py) :

- ValidationError : entree mal formee (400), jamais relancee
- NotFoundError : identite inconnue (404)
- ConflictError : doublon (400)
- MovieMismatchError : reponse rattachee a un autre film (400)
- ProviderError : echec du fournisseur amont, type par ProviderErrorKind
- StorageError : echec de la couche de persistance (500)
"""

from enum import Enum
from typing import Optional


class MovieVerseError(Exception):
    """Erreur de base de l'application."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(MovieVerseError):
    """Entree invalide fournie par l'appelant."""


class InvalidCategoryError(ValidationError):
    """Cle de categorie hors de l'ensemble ferme connu."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__("Invalid category")


class InvalidReactionError(ValidationError):
    """Type de reaction hors de l'enumeration ReactionKind."""

    def __init__(self, reaction: object) -> None:
        self.reaction = reaction
        super().__init__("Invalid reaction type")


class MissingUserIdError(ValidationError):
    """Identifiant utilisateur absent ou vide."""

    def __init__(self) -> None:
        super().__init__("User ID is required")


class NotFoundError(MovieVerseError):
    """Aucun enregistrement pour l'identite demandee."""


class ConflictError(MovieVerseError):
    """L'operation creerait un doublon."""


class DuplicateReactionError(ConflictError):
    """L'utilisateur a deja reagi a ce film."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__("User has already submitted a reaction for this movie")


class MovieMismatchError(MovieVerseError):
    """La critique ciblee appartient a un autre film."""

    def __init__(self) -> None:
        super().__init__("Review does not match the specified movie")


class ProviderErrorKind(str, Enum):
    """Classification des echecs du fournisseur amont."""

    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"


class ProviderError(MovieVerseError):
    """
    Echec d'un appel au fournisseur de catalogue.

    Attributes:
        kind: Classification de l'echec
        status_code: Code HTTP amont, None pour timeout ou erreur reseau
        endpoint: Chemin de l'endpoint appele
    """

    def __init__(
        self,
        kind: ProviderErrorKind,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)

    @classmethod
    def from_status(cls, status_code: int, endpoint: str) -> "ProviderError":
        """Construit l'erreur correspondant a un code HTTP non-2xx."""
        if status_code == 429:
            kind = ProviderErrorKind.RATE_LIMITED
        elif status_code in (401, 403):
            kind = ProviderErrorKind.UNAUTHORIZED
        elif status_code == 404:
            kind = ProviderErrorKind.NOT_FOUND
        else:
            kind = ProviderErrorKind.TRANSIENT
        return cls(
            kind,
            f"TMDB a repondu {status_code} sur {endpoint}",
            status_code=status_code,
            endpoint=endpoint,
        )


class StorageError(MovieVerseError):
    """Echec de lecture ou d'ecriture dans la base."""
