from pydantic import BaseModel, Field


EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100, pattern=r"\S")
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)


class UserUpdate(UserCreate):
    # must repeat the id from the path; an omitted id reads as 0 and is rejected
    id: int = 0


class UserOut(UserCreate):
    id: int
