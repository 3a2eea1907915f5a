from pydantic import BaseModel


class SystemHealth(BaseModel):
    status: str
    database: bool
