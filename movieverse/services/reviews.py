"""
Service des critiques et de leurs fils de reponses.
"""

import re
from datetime import datetime
from typing import Optional

from loguru import logger

from movieverse.core.entities.review import Reply, Review
from movieverse.core.exceptions import MovieMismatchError, NotFoundError, ValidationError
from movieverse.core.ports.repositories import IReviewRepository

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_TEXT_LENGTH = 3


def _clean(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_author(name: object, email: object) -> tuple[str, str]:
    """
    Valide le nom et l'email d'un auteur.

    Returns:
        Tuple (nom, email) nettoyes

    Raises:
        ValidationError: Champ manquant ou email mal forme
    """
    name, email = _clean(name), _clean(email)
    if not name or not email:
        raise ValidationError("Name and email are required")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")
    return name, email


def validate_text(text: object, label: str) -> str:
    """Verifie qu'un texte fait au moins MIN_TEXT_LENGTH caracteres apres nettoyage."""
    cleaned = _clean(text)
    if len(cleaned) < MIN_TEXT_LENGTH:
        raise ValidationError(f"{label} must be at least {MIN_TEXT_LENGTH} characters long")
    return cleaned


class ReviewService:
    """
    Service de gestion des critiques.

    Les critiques sont rattachees a une identite de film sans verifier
    que le film existe en base : un film consulte via sa fiche
    provisoire peut recevoir des critiques.
    """

    def __init__(self, review_repo: IReviewRepository) -> None:
        """
        Initialise le service.

        Args:
            review_repo: Repository des critiques
        """
        self._review_repo = review_repo

    def submit_review(
        self, source: str, external_id: str, text: object, name: object, email: object
    ) -> Review:
        """
        Cree une critique.

        Raises:
            ValidationError: Texte trop court, auteur incomplet ou email invalide
        """
        cleaned_text = validate_text(text, "Review")
        author, address = validate_author(name, email)

        review = self._review_repo.create(
            Review(
                source=source,
                external_id=external_id,
                text=cleaned_text,
                name=author,
                email=address,
                created_at=datetime.utcnow(),
            )
        )
        logger.info(f"Critique {review.id} ajoutee sur {source}:{external_id} par {author}")
        return review

    def submit_reply(
        self,
        source: str,
        external_id: str,
        review_id: str,
        text: object,
        name: object,
        email: object,
    ) -> Review:
        """
        Ajoute une reponse a la fin du fil d'une critique.

        Raises:
            ValidationError: Texte trop court, auteur incomplet ou email invalide
            NotFoundError: Critique inconnue
            MovieMismatchError: La critique porte sur un autre film
        """
        cleaned_text = validate_text(text, "Reply")
        author, address = validate_author(name, email)

        review: Optional[Review] = self._review_repo.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        if review.source != source or review.external_id != external_id:
            raise MovieMismatchError()

        updated = self._review_repo.append_reply(
            review_id,
            Reply(text=cleaned_text, name=author, email=address, created_at=datetime.utcnow()),
        )
        logger.info(f"Reponse ajoutee a la critique {review_id} par {author}")
        return updated

    def list_reviews(self, source: str, external_id: str) -> list[Review]:
        """Critiques d'un film, la plus recente en premier."""
        return self._review_repo.list_by_movie(source, external_id)
