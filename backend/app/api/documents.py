"""Client document pages and actions."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import admin_only_action, get_current_user, get_db
from app.api.results import action_error
from app.errors import DependencyConflict, RecordNotFound
from app.models.lead import Document
from app.models.user import User
from app.schemas.common import ActionResult
from app.schemas.lead import DocumentResponse
from app.services.records import delete_record

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[DocumentResponse])
def get_documents(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Document).order_by(Document.created_at.desc()).all()


@router.delete("/{document_id}", response_model=ActionResult)
def delete_document(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "delete documents")
    if rejected:
        return rejected

    try:
        delete_record(db, Document, document_id, "document")
    except (DependencyConflict, RecordNotFound) as exc:
        return action_error(exc)

    return ActionResult(success=True, message="Document deleted")
