"""Dashboard landing page."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.lead import Lead
from app.models.policy import Claim, Policy
from app.models.user import User
from app.schemas.auth import UserResponse
from app.services.notifications import count_unread

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardResponse(BaseModel):
    user: UserResponse
    is_admin: bool
    active_policies: int
    open_claims: int
    new_leads: int
    unread_notifications: int


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Welcome view with headline counts."""
    return DashboardResponse(
        user=UserResponse.model_validate(current_user),
        is_admin=current_user.is_admin,
        active_policies=db.query(Policy).filter(Policy.status == "active").count(),
        open_claims=db.query(Claim).filter(Claim.status == "pending").count(),
        new_leads=db.query(Lead).filter(Lead.status == "new").count(),
        unread_notifications=count_unread(db),
    )
