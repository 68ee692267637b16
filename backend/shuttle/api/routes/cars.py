"""Cars — shuttle vehicles, token-protected."""

from fastapi import Depends

from shuttle.api.dependencies import require_token
from shuttle.api.routes.crud import build_crud_router
from shuttle.core.domain_types import ResourceKind
from shuttle.schemas.resources import CarBody

router = build_crud_router(
    kind=ResourceKind.CARS,
    prefix="/api/cars",
    body_model=CarBody,
    tags=["cars"],
    dependencies=[Depends(require_token)],
)
