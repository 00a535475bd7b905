from fastapi import APIRouter, HTTPException, status
from typing import List

from svpg.config.database import Collections
from svpg.database.db_operations import db_ops
from svpg.models.user import UserCreate, UserResponse
from svpg.utils.helpers import serialize_doc, serialize_docs

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate):
    """Register a resident account that payments can be linked to"""
    created = await db_ops.create(Collections.USERS, user.model_dump())
    return serialize_doc(created)


@router.get("", response_model=List[UserResponse])
async def get_users():
    users = await db_ops.get_all(Collections.USERS, sort=[("name", 1)])
    return serialize_docs(users)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str):
    user = await db_ops.get_by_id(Collections.USERS, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return serialize_doc(user)
