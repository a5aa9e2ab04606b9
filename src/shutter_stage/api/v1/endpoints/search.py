"""Search endpoints for the Shutter Stage API."""

from typing import Annotated

from fastapi import APIRouter, Query

from shutter_stage.api.v1.dependencies import SessionDep
from shutter_stage.schemas.post import PostTagResponse
from shutter_stage.schemas.search import EquipmentResponse
from shutter_stage.services.search import SearchService

router = APIRouter(prefix="/search", tags=["search"])

KeywordQuery = Annotated[str, Query(min_length=1, max_length=128)]


@router.get("/tags", response_model=list[PostTagResponse])
async def search_tags(db: SessionDep, name: KeywordQuery) -> list[PostTagResponse]:
    """Find tags whose name contains the keyword."""
    return [PostTagResponse.model_validate(tag) for tag in SearchService(db).tags(name)]


@router.get("/cameras", response_model=list[EquipmentResponse])
async def search_cameras(
    db: SessionDep,
    make_model: Annotated[str, Query(alias="makeModel", min_length=1, max_length=128)],
) -> list[EquipmentResponse]:
    """Find camera bodies whose "make model" contains the keyword."""
    return [
        EquipmentResponse(make=make, model=model)
        for make, model in SearchService(db).cameras(make_model)
    ]


@router.get("/lens", response_model=list[EquipmentResponse])
async def search_lens(
    db: SessionDep,
    make_model: Annotated[str, Query(alias="makeModel", min_length=1, max_length=128)],
) -> list[EquipmentResponse]:
    """Find lenses whose "make model" contains the keyword."""
    return [
        EquipmentResponse(make=make, model=model)
        for make, model in SearchService(db).lenses(make_model)
    ]
