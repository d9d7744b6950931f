from __future__ import annotations

from sqlalchemy.orm import Session

from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError
from briklyst.models.email_template import EmailTemplate
from briklyst.models.user import User
from briklyst.schemas.mailing import EmailTemplateCreate, EmailTemplateUpdate


def _owned_template(db: Session, user: User, template_id: int) -> EmailTemplate:
    template = (
        db.query(EmailTemplate)
        .filter(EmailTemplate.id == template_id, EmailTemplate.user_id == user.id)
        .first()
    )
    if template is None:
        raise NotFoundError("Template not found")
    return template


def list_templates(db: Session, user: User) -> list[EmailTemplate]:
    return (
        db.query(EmailTemplate)
        .filter(EmailTemplate.user_id == user.id)
        .order_by(EmailTemplate.updated_at.desc(), EmailTemplate.id.desc())
        .all()
    )


def create_template(db: Session, user: User, payload: EmailTemplateCreate) -> EmailTemplate:
    template = EmailTemplate(user_id=user.id, **payload.model_dump())
    db.add(template)
    commit_or_rollback(db, "create email template")
    db.refresh(template)
    return template


def update_template(db: Session, user: User, template_id: int, payload: EmailTemplateUpdate) -> EmailTemplate:
    template = _owned_template(db, user, template_id)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(template, field, value)
    commit_or_rollback(db, "update email template")
    db.refresh(template)
    return template


def delete_template(db: Session, user: User, template_id: int) -> None:
    template = _owned_template(db, user, template_id)
    db.delete(template)
    commit_or_rollback(db, "delete email template")
