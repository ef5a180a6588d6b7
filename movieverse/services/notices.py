"""
Annonces affichees en tete des clients.
"""

from movieverse.utils.constants import NOTICES


class NoticeService:
    """Liste fixe d'annonces, sans stockage."""

    def __init__(self, notices: tuple[str, ...] = NOTICES) -> None:
        self._notices = notices

    def list_notices(self) -> list[dict[str, str]]:
        return [{"text": text} for text in self._notices]
