from fastapi import APIRouter, Depends, Response, status

from ...crud import users as crud
from ...schemas.user import UserCreate, UserOut, UserUpdate
from ..deps import get_store

router = APIRouter()


@router.get("/", response_model=list[UserOut])
def list_users(engine=Depends(get_store)):
    return crud.list_users(engine)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, engine=Depends(get_store)):
    return crud.get_user(engine, user_id)


@router.post("/", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, engine=Depends(get_store)):
    return crud.create_user(engine, payload)


@router.put("/{user_id}", status_code=204)
def update_user(user_id: int, payload: UserUpdate, engine=Depends(get_store)):
    crud.update_user(engine, user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, engine=Depends(get_store)):
    crud.delete_user(engine, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
