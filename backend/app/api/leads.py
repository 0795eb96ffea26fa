"""Lead pages and actions."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import admin_only_action, get_current_user, get_db
from app.api.results import action_error
from app.errors import DependencyConflict, RecordNotFound
from app.models.lead import Lead
from app.models.user import User
from app.schemas.common import ActionResult
from app.schemas.lead import LeadCreate, LeadResponse
from app.services.records import delete_record

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("", response_model=list[LeadResponse])
def get_leads(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Lead).order_by(Lead.created_at.desc()).all()


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def add_lead(
    lead_data: LeadCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lead = Lead(**lead_data.model_dump())
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return ActionResult(success=True, message="Lead added", id=lead.id)


@router.post("/{lead_id}/convert", response_model=ActionResult)
def convert_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Mark a lead as converted."""
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if not lead:
        return action_error(RecordNotFound("Lead not found"))

    lead.status = "converted"
    db.commit()
    return ActionResult(success=True, message="Lead converted", id=lead.id)


@router.delete("/{lead_id}", response_model=ActionResult)
def delete_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "delete leads")
    if rejected:
        return rejected

    try:
        delete_record(db, Lead, lead_id, "lead")
    except (DependencyConflict, RecordNotFound) as exc:
        return action_error(exc)

    return ActionResult(success=True, message="Lead deleted")
