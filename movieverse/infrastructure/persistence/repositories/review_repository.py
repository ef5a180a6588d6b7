"""
Implementation SQLModel du repository Review.

Les reponses sont stockees dans leur propre table et ne sont jamais
adressees independamment : elles sont lues et ajoutees via leur critique.
"""

from typing import Optional

from sqlmodel import Session, select

from movieverse.core.entities.review import Reply, Review
from movieverse.core.exceptions import NotFoundError
from movieverse.core.ports.repositories import IReviewRepository
from movieverse.infrastructure.persistence.database import storage_guard
from movieverse.infrastructure.persistence.models import ReviewModel, ReviewReplyModel


class SQLModelReviewRepository(IReviewRepository):
    """
    Repository SQLModel pour les critiques et leurs fils de reponses.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: ReviewModel, replies: list[ReviewReplyModel]) -> Review:
        """Convertit une critique et ses reponses en entite domaine."""
        return Review(
            id=str(model.id) if model.id else None,
            source=model.source,
            external_id=model.external_id,
            text=model.text,
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            replies=[
                Reply(text=r.text, name=r.name, email=r.email, created_at=r.created_at)
                for r in replies
            ],
        )

    def _replies_for(self, review_ids: list[int]) -> dict[int, list[ReviewReplyModel]]:
        """Reponses de plusieurs critiques, dans l'ordre d'insertion."""
        grouped: dict[int, list[ReviewReplyModel]] = {rid: [] for rid in review_ids}
        if not review_ids:
            return grouped
        rows = self._session.exec(
            select(ReviewReplyModel)
            .where(ReviewReplyModel.review_id.in_(review_ids))
            .order_by(ReviewReplyModel.id)
        ).all()
        for row in rows:
            grouped[row.review_id].append(row)
        return grouped

    @staticmethod
    def _parse_id(review_id: str) -> Optional[int]:
        try:
            return int(review_id)
        except (TypeError, ValueError):
            return None

    def create(self, review: Review) -> Review:
        """Persiste une nouvelle critique (sans reponses)."""
        with storage_guard(self._session, "ecriture critique"):
            model = ReviewModel(
                source=review.source,
                external_id=review.external_id,
                text=review.text,
                name=review.name,
                email=review.email,
            )
            if review.created_at is not None:
                model.created_at = review.created_at
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return self._to_entity(model, [])

    def get_by_id(self, review_id: str) -> Optional[Review]:
        """Recupere une critique et ses reponses, None si l'ID est inconnu ou invalide."""
        pk = self._parse_id(review_id)
        if pk is None:
            return None
        with storage_guard(self._session, "lecture critique"):
            model = self._session.get(ReviewModel, pk)
            if model is None:
                return None
            return self._to_entity(model, self._replies_for([pk])[pk])

    def append_reply(self, review_id: str, reply: Reply) -> Review:
        """
        Ajoute une reponse a la fin du fil.

        Raises :
            NotFoundError : Critique inconnue
        """
        pk = self._parse_id(review_id)
        with storage_guard(self._session, "ecriture reponse"):
            model = self._session.get(ReviewModel, pk) if pk is not None else None
            if model is None:
                raise NotFoundError("Review not found")

            row = ReviewReplyModel(
                review_id=pk,
                text=reply.text,
                name=reply.name,
                email=reply.email,
            )
            if reply.created_at is not None:
                row.created_at = reply.created_at
            self._session.add(row)
            self._session.commit()
            self._session.refresh(model)
            return self._to_entity(model, self._replies_for([pk])[pk])

    def list_by_movie(self, source: str, external_id: str) -> list[Review]:
        """Critiques d'un film, la plus recente en premier."""
        with storage_guard(self._session, "lecture critiques"):
            models = self._session.exec(
                select(ReviewModel)
                .where(
                    ReviewModel.source == source,
                    ReviewModel.external_id == external_id,
                )
                .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
            ).all()
            replies = self._replies_for([m.id for m in models])
            return [self._to_entity(m, replies[m.id]) for m in models]
