"""
Rephrase Backend: Variant Route Handlers
==========================================

What:  CRUD for the variants of one session, nested under
       /api/rephrase/sessions/{session_id}/variants.
How:   The session id always comes from the path, so every variant call
       names the session whose ownership is checked.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import get_current_user
from app.schemas.rephrase import (
    AckEnvelope,
    CurrentUser,
    ErrorResponse,
    VariantCreate,
    VariantEnvelope,
    VariantListEnvelope,
    VariantUpdate,
)
from app.services.variant_service import variant_service


router = APIRouter(prefix="/api/rephrase/sessions/{session_id}", tags=["Variants"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    401: {"description": "No authenticated caller", "model": ErrorResponse},
    404: {"description": "Session or variant not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/variants",
    response_model=VariantEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Add a variant to a session",
    description="`content` must be non-empty. `isFavorite` defaults to false.",
)
async def create_variant(
    session_id: str,
    body: VariantCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> VariantEnvelope:
    return await variant_service.create_variant(
        db=db, user=user, session_id=session_id, data=body
    )


@router.get(
    "/variants",
    response_model=VariantListEnvelope,
    responses=_ERRORS,
    summary="List a session's variants",
    description="Variants in creation order. `favoritesOnly=true` keeps only favorites.",
)
async def list_variants(
    session_id: str,
    response: Response,
    favorites_only: bool = Query(
        default=False,
        alias="favoritesOnly",
        description="Only return variants marked as favorite",
    ),
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> VariantListEnvelope:
    result = await variant_service.list_variants(
        db=db, user=user, session_id=session_id, favorites_only=favorites_only
    )
    response.headers["X-Total-Count"] = str(result.data.total)
    return result


@router.patch(
    "/variants/{variant_id}",
    response_model=VariantEnvelope,
    responses=_ERRORS,
    summary="Update a variant",
    description=(
        "Overwrites only the supplied fields among `tone`, `complexity`, "
        "`variantLabel`, `content` and `isFavorite`. At least one must be supplied."
    ),
)
async def update_variant(
    session_id: str,
    variant_id: str,
    body: VariantUpdate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> VariantEnvelope:
    return await variant_service.update_variant(
        db=db, user=user, session_id=session_id, variant_id=variant_id, data=body
    )


@router.delete(
    "/variants/{variant_id}",
    response_model=AckEnvelope,
    responses=_ERRORS,
    summary="Delete a variant",
    description="Deleting a variant that no longer exists returns 404.",
)
async def delete_variant(
    session_id: str,
    variant_id: str,
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> AckEnvelope:
    return await variant_service.delete_variant(
        db=db, user=user, session_id=session_id, variant_id=variant_id
    )
