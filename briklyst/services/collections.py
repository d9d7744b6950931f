from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError, ValidationError
from briklyst.models.collection import Collection
from briklyst.models.storefront import Storefront
from briklyst.models.user import User
from briklyst.schemas.collection import CollectionCreate, CollectionUpdate
from briklyst.services.storefronts import ensure_storefront
from briklyst.utils.slug import slugify

DUPLICATE_NAME = "A collection with this name already exists"


def _owned_collection(db: Session, user: User, collection_id: int) -> Collection:
    collection = (
        db.query(Collection)
        .join(Storefront, Storefront.id == Collection.storefront_id)
        .filter(Collection.id == collection_id, Storefront.user_id == user.id)
        .first()
    )
    if collection is None:
        raise NotFoundError("Collection not found")
    return collection


def _name_taken(db: Session, storefront_id: int, name: str, *, exclude_id: int | None = None) -> bool:
    query = db.query(Collection.id).filter(Collection.storefront_id == storefront_id, Collection.name == name)
    if exclude_id is not None:
        query = query.filter(Collection.id != exclude_id)
    return query.first() is not None


def _save(db: Session) -> None:
    try:
        commit_or_rollback(db, "save collection")
    except IntegrityError as exc:
        raise ValidationError(DUPLICATE_NAME) from exc


def list_collections(db: Session, user: User) -> list[Collection]:
    storefront = ensure_storefront(db, user)
    return (
        db.query(Collection)
        .filter(Collection.storefront_id == storefront.id)
        .order_by(Collection.created_at.desc(), Collection.id.desc())
        .all()
    )


def create_collection(db: Session, user: User, payload: CollectionCreate) -> Collection:
    storefront = ensure_storefront(db, user)
    name = payload.name.strip()
    if _name_taken(db, storefront.id, name):
        raise ValidationError(DUPLICATE_NAME)

    collection = Collection(
        storefront_id=storefront.id,
        name=name,
        slug=slugify(name),
        description=payload.description,
        tags=payload.tags,
    )
    db.add(collection)
    _save(db)
    db.refresh(collection)
    return collection


def update_collection(db: Session, user: User, collection_id: int, payload: CollectionUpdate) -> Collection:
    collection = _owned_collection(db, user, collection_id)
    data = payload.model_dump(exclude_unset=True)

    name = (data.pop("name", None) or "").strip()
    if name and name != collection.name:
        if _name_taken(db, collection.storefront_id, name, exclude_id=collection.id):
            raise ValidationError(DUPLICATE_NAME)
        collection.name = name
        collection.slug = slugify(name)
    if "description" in data:
        collection.description = data["description"]
    if data.get("tags") is not None:
        collection.tags = data["tags"]

    _save(db)
    db.refresh(collection)
    return collection


def delete_collection(db: Session, user: User, collection_id: int) -> None:
    collection = _owned_collection(db, user, collection_id)
    db.delete(collection)
    commit_or_rollback(db, "delete collection")
