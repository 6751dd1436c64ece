from fastapi import APIRouter, Depends, Response, status

from ...crud import books as crud
from ...schemas.book import BookCreate, BookOut, BookUpdate
from ..deps import get_store

router = APIRouter()


@router.get("/", response_model=list[BookOut])
def list_books(engine=Depends(get_store)):
    return crud.list_books(engine)


@router.get("/{book_id}", response_model=BookOut)
def get_book(book_id: int, engine=Depends(get_store)):
    return crud.get_book(engine, book_id)


@router.post("/", response_model=BookOut, status_code=201)
def create_book(payload: BookCreate, engine=Depends(get_store)):
    return crud.create_book(engine, payload)


@router.put("/{book_id}", status_code=204)
def update_book(book_id: int, payload: BookUpdate, engine=Depends(get_store)):
    crud.update_book(engine, book_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{book_id}", status_code=204)
def delete_book(book_id: int, engine=Depends(get_store)):
    crud.delete_book(engine, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
