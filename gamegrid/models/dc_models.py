from pydantic import BaseModel
from typing import Optional, List, Any


class ImageModel(BaseModel):
    url: str

    class Config:
        extra = "allow"


class GameModel(BaseModel):
    """A catalog game as served to the client.

    Fields the catalog returns beyond these (rating, summary, ...) are kept.
    """
    id: Optional[int] = None
    name: str
    cover: Optional[ImageModel] = None
    screenshots: Optional[List[ImageModel]] = None
    first_release_date: Optional[int] = None

    class Config:
        extra = "allow"
        from_attributes = True


class GridResponseModel(BaseModel):
    games: List[GameModel]
    gridId: str  # YYYY-MM-DD
    gridNumber: int


class ErrorModel(BaseModel):
    error: str
    details: Optional[Any] = None


class HealthModel(BaseModel):
    status: str = "ok"
