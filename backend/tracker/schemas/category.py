from .base import ApiModel


class CategoryResponse(ApiModel):
    """Category with display metadata."""
    id: int
    name: str
    icon: str
    color: str
