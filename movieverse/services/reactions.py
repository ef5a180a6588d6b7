"""
Service des reactions sur les films.

Un utilisateur ne reagit qu'une seule fois par film. Le compteur du type
choisi est incremente dans la meme transaction que l'enregistrement.
"""

from loguru import logger

from movieverse.core.entities.media import ReactionKind
from movieverse.core.exceptions import InvalidReactionError, MissingUserIdError, NotFoundError
from movieverse.core.ports.repositories import IMovieRepository


class ReactionService:
    """Validation et enregistrement des reactions."""

    def __init__(self, movie_repo: IMovieRepository) -> None:
        self._movie_repo = movie_repo

    @staticmethod
    def _parse_kind(reaction: object) -> ReactionKind:
        try:
            return ReactionKind(reaction)
        except ValueError as e:
            raise InvalidReactionError(reaction) from e

    def submit_reaction(
        self, source: str, external_id: str, user_id: object, reaction: object
    ) -> dict[str, int]:
        """
        Enregistre la reaction d'un utilisateur.

        Returns:
            Les compteurs mis a jour, un par ReactionKind

        Raises:
            InvalidReactionError: Type de reaction inconnu
            MissingUserIdError: Identifiant utilisateur absent
            NotFoundError: Film absent de la base
            DuplicateReactionError: L'utilisateur a deja reagi
        """
        kind = self._parse_kind(reaction)
        if not isinstance(user_id, str) or not user_id.strip():
            raise MissingUserIdError()

        counts = self._movie_repo.add_reaction(source, external_id, user_id.strip(), kind.value)
        logger.info(f"Reaction {kind.value} de {user_id.strip()} sur {source}:{external_id}")
        return counts

    def list_reactions(self, source: str, external_id: str) -> dict[str, int]:
        """
        Compteurs de reactions d'un film.

        Raises:
            NotFoundError: Film absent de la base
        """
        counts = self._movie_repo.get_reaction_counts(source, external_id)
        if counts is None:
            raise NotFoundError("Movie not found")
        return counts
