"""Shared API dependencies for authentication and listing derivations."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from shutter_stage.core.errors import AuthenticationRequiredError
from shutter_stage.core.security import decode_access_token
from shutter_stage.core.settings import settings
from shutter_stage.db.session import get_db
from shutter_stage.models import User
from shutter_stage.services.identity import ANONYMOUS_PRINCIPAL, Principal, principal_for
from shutter_stage.services.post_query import ListingContext, build_listing_context

# Missing credentials resolve to the anonymous principal instead of failing.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_user_id(subject: object) -> int:
    """Decode the numeric user id carried in a token subject.

    Raises:
        HTTPException: If the subject is not a positive integer
    """
    try:
        user_id = int(str(subject))
    except ValueError as err:
        raise _credentials_error() from err
    if user_id < 1:
        raise _credentials_error()
    return user_id


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> Principal:
    """Resolve the requesting principal from an optional bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        The anonymous principal when no token is present, otherwise the
        principal of the token's user

    Raises:
        HTTPException: If the token is invalid or its user does not exist
    """
    if credentials is None:
        return ANONYMOUS_PRINCIPAL
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    if subject is None:
        raise _credentials_error()
    user = db.get(User, _decode_user_id(subject))
    if user is None:
        raise _credentials_error("User not found")
    return principal_for(user)


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


def require_authenticated(principal: PrincipalDep) -> Principal:
    """Reject anonymous callers."""
    if principal.is_anonymous:
        raise AuthenticationRequiredError()
    return principal


AuthenticatedPrincipalDep = Annotated[Principal, Depends(require_authenticated)]


def get_listing_context(request: Request, principal: PrincipalDep) -> ListingContext:
    """Derive filter, sort, pagination and mode from the query string."""
    return build_listing_context(
        request.query_params,
        principal,
        items_per_page=settings.effective_posts_per_page,
    )


ListingContextDep = Annotated[ListingContext, Depends(get_listing_context)]
