import uuid

from pydantic import BaseModel


class IdResponse(BaseModel):
    id: str


def validate_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise ValueError("must be a valid UUID")
