from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.app.services.token_service import AccessClaims
from src.depends import get_current_account

router = APIRouter(tags=["Protected"])


class ProtectedResponse(BaseModel):
    """GET /protected response payload"""

    message: str
    account_id: str
    email: str


@router.get("/protected", status_code=status.HTTP_200_OK, response_model=ProtectedResponse)
async def protected(current_account: AccessClaims = Depends(get_current_account)):
    """
    Protected resource

    Only reachable with a valid bearer token. Reads nothing but the
    verified account_id and email.

    Raises:
        - 401 Unauthorized: No bearer token
        - 403 Forbidden: Invalid or expired token
    """
    return ProtectedResponse(
        message=f"Hello, {current_account.email}. You have access to this protected route.",
        account_id=str(current_account.account_id),
        email=current_account.email,
    )
