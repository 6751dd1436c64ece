from fastapi import APIRouter, Depends, Response, status

from ...crud import copies as crud
from ...schemas.book_copy import BookCopyCreate, BookCopyOut, BookCopyUpdate
from ..deps import get_store

router = APIRouter()


@router.get("/", response_model=list[BookCopyOut])
def list_book_copies(engine=Depends(get_store)):
    return crud.list_copies(engine)


@router.get("/{copy_id}", response_model=BookCopyOut)
def get_book_copy(copy_id: int, engine=Depends(get_store)):
    return crud.get_copy(engine, copy_id)


@router.post("/", response_model=BookCopyOut, status_code=201)
def create_book_copy(payload: BookCopyCreate, engine=Depends(get_store)):
    return crud.create_copy(engine, payload)


@router.put("/{copy_id}", status_code=204)
def update_book_copy(copy_id: int, payload: BookCopyUpdate, engine=Depends(get_store)):
    crud.update_copy(engine, copy_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{copy_id}", status_code=204)
def delete_book_copy(copy_id: int, engine=Depends(get_store)):
    crud.delete_copy(engine, copy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
