"""HTTP routers, one module per resource."""
from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel

from qtrack.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def actor(value: str | None, name: str) -> str:
    """The acting user id carried in a request; 400 when absent."""
    if not value:
        raise ValidationError(f"{name} is required")
    return value


def payload(body: BaseModel, model: type[M], *drop: str) -> M:
    """Re-validate a request body as a service payload, keeping unset fields unset."""
    return model.model_validate(body.model_dump(exclude=set(drop), exclude_unset=True))
