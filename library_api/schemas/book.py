from enum import Enum

from pydantic import BaseModel, Field


class Genre(str, Enum):
    MYSTERY = "Mystery"
    ROMANCE = "Romance"
    SCIFI = "SciFi"
    FANTASY = "Fantasy"
    BIOGRAPHY = "Biography"
    HISTORY = "History"
    SELF_HELP = "SelfHelp"
    OTHER = "Other"


class BookCreate(BaseModel):
    # at least one non-blank character
    title: str = Field(min_length=1, max_length=100, pattern=r"\S")
    author: str = Field(default="", max_length=255)
    genre: Genre = Genre.OTHER
    description: str = ""


class BookUpdate(BookCreate):
    # must repeat the id from the path; an omitted id reads as 0 and is rejected
    id: int = 0


class BookOut(BookCreate):
    id: int
