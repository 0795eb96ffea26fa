"""Claim pages and actions."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import admin_only_action, get_current_user, get_db
from app.api.results import action_error
from app.errors import DependencyConflict, RecordNotFound
from app.models.policy import Claim, Policy
from app.models.user import User
from app.schemas.common import ActionResult
from app.schemas.policy import ClaimCreate, ClaimResponse
from app.services.records import delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/claims", tags=["claims"])


def _policy_exists(db: Session, policy_id: str) -> bool:
    return db.query(Policy.id).filter(Policy.id == policy_id).first() is not None


@router.get("", response_model=list[ClaimResponse])
def get_claims(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Claim).order_by(Claim.incident_date.desc()).all()


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def submit_claim(
    claim_data: ClaimCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """File a claim against a policy."""
    if not _policy_exists(db, claim_data.policy_id):
        return action_error(RecordNotFound("Policy not found"))

    claim = Claim(**claim_data.model_dump())
    db.add(claim)
    db.commit()
    db.refresh(claim)
    logger.info("User %s submitted claim %s on policy %s", current_user.id, claim.id, claim.policy_id)

    return ActionResult(success=True, message="Claim submitted successfully!", id=claim.id)


@router.put("/{claim_id}", response_model=ActionResult)
def edit_claim(
    claim_id: str,
    claim_data: ClaimCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    claim = db.query(Claim).filter(Claim.id == claim_id).first()
    if not claim:
        return action_error(RecordNotFound("Claim not found"))
    if not _policy_exists(db, claim_data.policy_id):
        return action_error(RecordNotFound("Policy not found"))

    for field, value in claim_data.model_dump().items():
        setattr(claim, field, value)
    db.commit()

    return ActionResult(success=True, message="Claim updated successfully.", id=claim.id)


@router.delete("/{claim_id}", response_model=ActionResult)
def delete_claim(
    claim_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "delete claims")
    if rejected:
        return rejected

    try:
        delete_record(db, Claim, claim_id, "claim")
    except (DependencyConflict, RecordNotFound) as exc:
        return action_error(exc)

    return ActionResult(success=True, message="Claim deleted")
