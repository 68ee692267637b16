"""CRUD Router Factory — the uniform list/get/create/update/delete surface.

Invariants:
    - GET ""        -> 200 {success, total, items}; query params are equality filters
    - GET "/{id}"   -> 200 {success, item} | 404
    - POST ""       -> 201 {success, item} | 400 | 409
    - PUT "/{id}"   -> 200 {success, item} | 404; body merged, unset fields kept
    - DELETE "/{id}"-> 200 {success, item} | 404
    - Routes never hold business logic; the registry does

Design Decisions:
    - One factory over five hand-written routers: resources differ only in
      kind, prefix and body schema
    - include_create=False lets a resource supply its own POST (checkout)
"""

from typing import Any, Sequence

from fastapi import APIRouter, Depends, Request, status

from shuttle.api.dependencies import get_catalog
from shuttle.core.domain_types import ResourceKind
from shuttle.core.registry import ResourceRegistry
from shuttle.schemas.resources import RecordBody
from shuttle.services.resource_catalog import ResourceCatalog


def item_envelope(item: dict[str, Any]) -> dict[str, Any]:
    return {"success": True, "item": item}


def build_crud_router(
    *,
    kind: ResourceKind,
    prefix: str,
    body_model: type[RecordBody],
    tags: list[str] | None = None,
    dependencies: Sequence[Any] = (),
    include_create: bool = True,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags or [kind.value], dependencies=list(dependencies))

    def get_registry(catalog: ResourceCatalog = Depends(get_catalog)) -> ResourceRegistry:
        return catalog.get(kind)

    @router.get("", summary=f"List {kind.value}")
    async def list_records(
        request: Request, registry: ResourceRegistry = Depends(get_registry),
    ):
        items = registry.list(dict(request.query_params))
        return {"success": True, "total": len(items), "items": items}

    @router.get("/{record_id}", summary=f"Get one of {kind.value}")
    async def get_record(
        record_id: str, registry: ResourceRegistry = Depends(get_registry),
    ):
        return item_envelope(registry.get(record_id))

    if include_create:
        @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create {kind.label}")
        async def create_record(
            body: body_model, registry: ResourceRegistry = Depends(get_registry),
        ):
            return item_envelope(registry.create(body.to_fields()))

    @router.put("/{record_id}", summary=f"Update {kind.label}")
    async def update_record(
        record_id: str,
        body: body_model,
        registry: ResourceRegistry = Depends(get_registry),
    ):
        return item_envelope(registry.update(record_id, body.to_fields(partial=True)))

    @router.delete("/{record_id}", summary=f"Delete {kind.label}")
    async def delete_record(
        record_id: str, registry: ResourceRegistry = Depends(get_registry),
    ):
        return item_envelope(registry.delete(record_id))

    return router
