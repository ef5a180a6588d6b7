"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel).

Toutes les implémentations lèvent StorageError sur un échec de la base.
"""

from abc import ABC, abstractmethod
from typing import Optional

from movieverse.core.entities.media import Movie
from movieverse.core.entities.review import Reply, Review
from movieverse.core.entities.watchlist import WatchlistEntry


class IMovieRepository(ABC):
    """
    Interface de stockage des films.

    L'identité durable est (source, external_id). La catégorie est une
    étiquette d'appartenance, jamais une partie de l'identité.
    """

    @abstractmethod
    def get_by_identity(self, source: str, external_id: str) -> Optional[Movie]:
        """Récupère un film par son identité, avec son état de réactions."""
        ...

    @abstractmethod
    def list_by_category(self, category: str) -> list[Movie]:
        """Liste les films étiquetés avec une catégorie."""
        ...

    @abstractmethod
    def list_categories(self, source: str, external_id: str) -> list[str]:
        """Étiquettes de catégorie d'un film, vide si le film est inconnu."""
        ...

    @abstractmethod
    def upsert_listing(self, movie: Movie, category: str) -> Movie:
        """
        Insère ou met à jour un film issu d'une liste de catégorie.

        Clé d'écriture : (source, external_id, category). Seuls les champs
        de niveau liste sont rafraîchis ; captures, champs de détail et
        réactions d'un enregistrement existant sont conservés.
        """
        ...

    @abstractmethod
    def upsert_details(self, movie: Movie) -> Movie:
        """
        Insère ou met à jour un film issu d'un appel de détail.

        Clé d'écriture : (source, external_id). Les réactions et les
        étiquettes de catégorie existantes sont conservées.
        """
        ...

    @abstractmethod
    def add_reaction(
        self, source: str, external_id: str, user_id: str, reaction: str
    ) -> dict[str, int]:
        """
        Ajoute la réaction d'un utilisateur et incrémente son compteur.

        L'ajout et l'incrément forment une seule transaction.

        Raises :
            NotFoundError : Film inconnu
            DuplicateReactionError : L'utilisateur a déjà réagi
        """
        ...

    @abstractmethod
    def get_reaction_counts(self, source: str, external_id: str) -> Optional[dict[str, int]]:
        """Compteurs de réactions d'un film, None si le film est inconnu."""
        ...


class IReviewRepository(ABC):
    """
    Interface de stockage des critiques et de leurs réponses.
    """

    @abstractmethod
    def create(self, review: Review) -> Review:
        """Persiste une nouvelle critique et retourne sa version avec ID."""
        ...

    @abstractmethod
    def get_by_id(self, review_id: str) -> Optional[Review]:
        """Récupère une critique et ses réponses."""
        ...

    @abstractmethod
    def append_reply(self, review_id: str, reply: Reply) -> Review:
        """Ajoute une réponse à la fin du fil d'une critique existante."""
        ...

    @abstractmethod
    def list_by_movie(self, source: str, external_id: str) -> list[Review]:
        """Liste les critiques d'un film, de la plus récente à la plus ancienne."""
        ...


class IWatchlistRepository(ABC):
    """
    Interface de stockage des listes de films à voir.
    """

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[WatchlistEntry]:
        """Liste les entrées d'un utilisateur dans l'ordre d'ajout."""
        ...

    @abstractmethod
    def add(self, entry: WatchlistEntry) -> WatchlistEntry:
        """
        Ajoute une entrée.

        Raises :
            ConflictError : Le film est déjà dans la liste
        """
        ...

    @abstractmethod
    def remove(self, user_id: str, source: str, external_id: str) -> bool:
        """Retire une entrée. Retourne True si une entrée a été supprimée."""
        ...
