from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class CategoryGet(BaseModel):
    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)
