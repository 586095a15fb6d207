from pydantic import BaseModel


class Principal(BaseModel):
    """The authenticated caller of a request."""
    user_id: int
