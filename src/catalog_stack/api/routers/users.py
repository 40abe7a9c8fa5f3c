"""
catalog_stack.api.routers.users

User endpoints (key-value store).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from catalog_stack.api.deps import user_service
from catalog_stack.api.problems import created, to_response
from catalog_stack.schemas import User
from catalog_stack.services.users import UserService

router = APIRouter(prefix="/usuarios", tags=["usuarios"])


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, svc: UserService = Depends(user_service)) -> Response:
    return to_response(await svc.get_user(user_id))


@router.post("", response_model=User, status_code=201)
async def upsert_user(body: User, svc: UserService = Depends(user_service)) -> Response:
    return created(await svc.upsert_user(body), location=f"/usuarios/{body.id}")


@router.get("", response_model=list[User])
async def list_users(svc: UserService = Depends(user_service)) -> Response:
    return to_response(await svc.list_users())
