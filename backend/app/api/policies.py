"""Policy pages and actions."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import admin_only_action, get_current_user, get_db
from app.api.results import action_error
from app.errors import DependencyConflict, RecordNotFound
from app.models.policy import Policy
from app.models.user import User
from app.schemas.common import ActionResult
from app.schemas.policy import PolicyCreate, PolicyResponse
from app.services.records import delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/policies", tags=["policies"])

DUPLICATE_NUMBER = "Policy number already exists"
POLICY_HAS_CLAIMS = "Cannot delete policy with existing claims. You must remove all claims first."


@router.get("", response_model=list[PolicyResponse])
def get_policies(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All policies, soonest expiry first."""
    return db.query(Policy).order_by(Policy.expiry_date.asc()).all()


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_policy(
    policy_data: PolicyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a new policy."""
    if db.query(Policy).filter(Policy.policy_number == policy_data.policy_number).first():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ActionResult(success=False, message=DUPLICATE_NUMBER).model_dump(),
        )

    policy = Policy(**policy_data.model_dump())
    db.add(policy)
    db.commit()
    db.refresh(policy)
    logger.info("User %s created policy %s", current_user.id, policy.policy_number)

    return ActionResult(success=True, message="Policy created", id=policy.id)


@router.get("/by-number/{policy_number}", response_model=PolicyResponse)
def get_policy_by_number(
    policy_number: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Look up a policy by its number, e.g. when filing a claim."""
    policy = db.query(Policy).filter(Policy.policy_number == policy_number).first()
    if not policy:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Policy not found",
        )
    return policy


@router.put("/{policy_id}", response_model=ActionResult)
def update_policy(
    policy_id: str,
    policy_data: PolicyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    policy = db.query(Policy).filter(Policy.id == policy_id).first()
    if not policy:
        return action_error(RecordNotFound("Policy not found"))

    taken = db.query(Policy).filter(
        Policy.policy_number == policy_data.policy_number,
        Policy.id != policy_id,
    ).first()
    if taken:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ActionResult(success=False, message=DUPLICATE_NUMBER).model_dump(),
        )

    for field, value in policy_data.model_dump().items():
        setattr(policy, field, value)
    db.commit()
    logger.info("User %s updated policy %s", current_user.id, policy.policy_number)

    return ActionResult(success=True, message="Policy updated", id=policy.id)


@router.delete("/{policy_id}", response_model=ActionResult)
def delete_policy(
    policy_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a policy. Refused while claims reference it."""
    rejected = admin_only_action(current_user, "delete policies")
    if rejected:
        return rejected

    try:
        delete_record(db, Policy, policy_id, "policy", conflict_message=POLICY_HAS_CLAIMS)
    except (DependencyConflict, RecordNotFound) as exc:
        return action_error(exc)

    return ActionResult(success=True, message="Policy deleted")
