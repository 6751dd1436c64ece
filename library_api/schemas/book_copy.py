from pydantic import BaseModel, StrictBool


class BookCopyCreate(BaseModel):
    # ids are always assigned by the store; anything but 0 is rejected on create
    id: int = 0
    book_id: int
    is_available: StrictBool


class BookCopyUpdate(BaseModel):
    # must repeat the id from the path; an omitted id reads as 0 and is rejected
    id: int = 0
    book_id: int
    is_available: StrictBool


class BookCopyOut(BaseModel):
    id: int
    book_id: int
    is_available: bool
