"""Commission management (admin only)."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import admin_only_action, get_current_user, get_db, require_admin
from app.api.results import action_error
from app.errors import DependencyConflict, RecordNotFound
from app.models.policy import Commission, Policy
from app.models.user import User
from app.schemas.common import ActionResult
from app.schemas.policy import CommissionCreate, CommissionResponse
from app.services.records import delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/commissions", tags=["commissions"])


@router.get("", response_model=list[CommissionResponse])
def get_commissions(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Commission tracking page."""
    commissions = db.query(Commission).order_by(Commission.commission_date.desc()).all()
    return [
        CommissionResponse(
            id=c.id,
            policy_id=c.policy_id,
            policy_number=c.policy.policy_number,
            amount=c.amount,
            status=c.status,
            commission_date=c.commission_date,
        )
        for c in commissions
    ]


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def add_commission(
    commission_data: CommissionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "manage commissions")
    if rejected:
        return rejected

    if not db.query(Policy).filter(Policy.id == commission_data.policy_id).first():
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ActionResult(success=False, message="Policy not found").model_dump(),
        )

    commission = Commission(**commission_data.model_dump())
    db.add(commission)
    db.commit()
    db.refresh(commission)
    logger.info("Admin %s added commission %s", current_user.id, commission.id)

    return ActionResult(success=True, message="Commission added successfully", id=commission.id)


@router.delete("/{commission_id}", response_model=ActionResult)
def delete_commission(
    commission_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "manage commissions")
    if rejected:
        return rejected

    try:
        delete_record(db, Commission, commission_id, "commission")
    except (DependencyConflict, RecordNotFound) as exc:
        return action_error(exc)

    return ActionResult(success=True, message="Commission deleted")
