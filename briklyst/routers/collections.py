from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.deps import get_current_user
from briklyst.models.user import User
from briklyst.schemas.collection import CollectionCreate, CollectionRead, CollectionUpdate
from briklyst.services import collections as collection_service

router = APIRouter(prefix="/api/collections", tags=["collections"])


@router.get("", response_model=list[CollectionRead])
def list_collections(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return collection_service.list_collections(db, current_user)


@router.post("", response_model=CollectionRead, status_code=201)
def create_collection(
    payload: CollectionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return collection_service.create_collection(db, current_user, payload)


@router.put("/{collection_id}", response_model=CollectionRead)
def update_collection(
    collection_id: int,
    payload: CollectionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return collection_service.update_collection(db, current_user, collection_id, payload)


@router.delete("/{collection_id}", status_code=204)
def delete_collection(
    collection_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    collection_service.delete_collection(db, current_user, collection_id)
    return Response(status_code=204)
