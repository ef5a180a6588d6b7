"""
Routes du catalogue : listes par categorie, fiches detaillees,
reactions et annonces.
"""

from fastapi import APIRouter, Depends

from ...services.catalog import CatalogService
from ...services.notices import NoticeService
from ...services.reactions import ReactionService
from ..deps import get_catalog_service, get_notice_service, get_reaction_service
from ..schemas import MovieOut, NoticeOut, ReactionCountsOut, ReactionIn

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get("/categories/{category}", response_model=list[MovieOut])
async def get_category(category: str, catalog: CatalogService = Depends(get_catalog_service)):
    """Films d'une categorie (base si suffisante, sinon TMDB)."""
    movies = await catalog.get_category(category)
    return [MovieOut.model_validate(m) for m in movies]


@router.get("/details/{source}/{external_id}", response_model=MovieOut)
async def get_details(
    source: str,
    external_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Fiche detaillee, ou fiche provisoire si TMDB est indisponible."""
    movie = await catalog.get_details(source, external_id)
    return MovieOut.model_validate(movie)


@router.post("/reactions/{source}/{external_id}", response_model=ReactionCountsOut)
def submit_reaction(
    source: str,
    external_id: str,
    body: ReactionIn,
    reactions: ReactionService = Depends(get_reaction_service),
):
    counts = reactions.submit_reaction(source, external_id, body.user_id, body.reaction)
    return ReactionCountsOut(reaction_counts=counts)


@router.get("/reactions/{source}/{external_id}", response_model=ReactionCountsOut)
def list_reactions(
    source: str,
    external_id: str,
    reactions: ReactionService = Depends(get_reaction_service),
):
    return ReactionCountsOut(reaction_counts=reactions.list_reactions(source, external_id))


@router.get("/notices", response_model=list[NoticeOut])
def list_notices(notices: NoticeService = Depends(get_notice_service)):
    return notices.list_notices()
