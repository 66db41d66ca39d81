"""
Dental SaaS Backend — Generic Entity Router
=============================================

What:  Builds the REST surface of one entity from its registry entry.
How:   `build_entity_router()` closes over the entity's record class, so the
       request body, response model and OpenAPI docs are entity-specific while
       the handler code is written once.
Who:   Called by routes/dental.py and routes/financial.py.

Routes (relative to the entity path, e.g. /dentist):
    POST   ""                 201 + record      400, 409, 500
    GET    ""                 200 + [record]    500
    GET    /{item_id}         200 + record      404, 500
    PUT    /{item_id}         200 + record      400, 404, 500
    DELETE /{item_id}         204               404, 500
    GET    /<segment>/{value} one route per Lookup (see below)

Routes stay thin: they never catch. Errors raised by the service map to
status codes in main.register_exception_handlers.
"""

from typing import Callable, List, NamedTuple, Sequence

from fastapi import APIRouter, Depends, Request, Response, status

from dental_saas.entities import EntityDefinition
from dental_saas.schemas.base import Record
from dental_saas.schemas.common import ErrorResponse
from dental_saas.services.entity_service import EntityService

SUBSTRING = "substring"      # 200 + list (possibly empty)
EXACT_LIST = "exact_list"    # 200 + list (possibly empty)
EXACT_ONE = "exact_one"      # 200 + record, 404 when nothing matches


class Lookup(NamedTuple):
    segment: str
    field: str
    kind: str


def service_dependency(entity_name: str) -> Callable[[Request], EntityService]:
    """FastAPI dependency returning the EntityService built for this entity."""

    def get_service(request: Request) -> EntityService:
        return request.app.state.services[entity_name]

    return get_service


_ERRORS_400 = {400: {"description": "Invalid body or missing required field", "model": ErrorResponse}}
_ERRORS_404 = {404: {"description": "Item not found", "model": ErrorResponse}}
_ERRORS_409 = {409: {"description": "Item with this ID already exists", "model": ErrorResponse}}
_ERRORS_500 = {500: {"description": "Store failure", "model": ErrorResponse}}


def build_entity_router(entity: EntityDefinition, lookups: Sequence[Lookup] = ()) -> APIRouter:
    record_cls = entity.record
    label = entity.label
    router = APIRouter(prefix=f"/{entity.name}", tags=[f"{label}s"])
    get_service = service_dependency(entity.name)

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        response_model=record_cls,
        responses={**_ERRORS_400, **_ERRORS_409, **_ERRORS_500},
        summary=f"Create a {label.lower()}",
        name=f"create_{entity.name}",
    )
    async def create_item(
        payload: record_cls,
        service: EntityService = Depends(get_service),
    ) -> Record:
        return await service.create(payload)

    @router.get(
        "",
        response_model=List[record_cls],
        responses={**_ERRORS_500},
        summary=f"List all {label.lower()}s (full scan)",
        name=f"list_{entity.name}s",
    )
    async def list_items(service: EntityService = Depends(get_service)) -> List[Record]:
        return await service.list_all()

    for lookup in lookups:
        _add_lookup_route(router, entity, lookup, get_service)

    @router.get(
        "/{item_id}",
        response_model=record_cls,
        responses={**_ERRORS_404, **_ERRORS_500},
        summary=f"Get a {label.lower()} by ID",
        name=f"get_{entity.name}",
    )
    async def get_item(item_id: str, service: EntityService = Depends(get_service)) -> Record:
        return await service.get(item_id)

    @router.put(
        "/{item_id}",
        response_model=record_cls,
        responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
        summary=f"Partially update a {label.lower()}",
        description=(
            "Non-empty fields in the body overwrite stored values; absent or empty "
            "fields keep them. The merged record must still have every required field."
        ),
        name=f"update_{entity.name}",
    )
    async def update_item(
        item_id: str,
        payload: record_cls,
        service: EntityService = Depends(get_service),
    ) -> Record:
        return await service.update(item_id, payload)

    @router.delete(
        "/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses={**_ERRORS_404, **_ERRORS_500},
        summary=f"Delete a {label.lower()}",
        name=f"delete_{entity.name}",
    )
    async def delete_item(item_id: str, service: EntityService = Depends(get_service)) -> Response:
        await service.delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def _add_lookup_route(
    router: APIRouter,
    entity: EntityDefinition,
    lookup: Lookup,
    get_service: Callable[[Request], EntityService],
) -> None:
    record_cls = entity.record
    label = entity.label.lower()
    path = f"/{lookup.segment}/{{value}}"
    name = f"get_{entity.name}_by_{lookup.segment}"

    if lookup.kind == EXACT_ONE:
        @router.get(
            path,
            response_model=record_cls,
            responses={**_ERRORS_404, **_ERRORS_500},
            summary=f"Get a {label} by {lookup.field} (case-insensitive exact match)",
            name=name,
        )
        async def find_one(value: str, service: EntityService = Depends(get_service)) -> Record:
            return await service.find_one_by(lookup.field, value)

    elif lookup.kind == EXACT_LIST:
        @router.get(
            path,
            response_model=List[record_cls],
            responses={**_ERRORS_500},
            summary=f"List {label}s by {lookup.field} (case-insensitive exact match)",
            name=name,
        )
        async def list_matching(value: str, service: EntityService = Depends(get_service)) -> List[Record]:
            return await service.list_by(lookup.field, value)

    elif lookup.kind == SUBSTRING:
        @router.get(
            path,
            response_model=List[record_cls],
            responses={**_ERRORS_500},
            summary=f"Search {label}s by {lookup.field} (case-insensitive substring)",
            name=name,
        )
        async def search(value: str, service: EntityService = Depends(get_service)) -> List[Record]:
            return await service.search(lookup.field, value)

    else:
        raise ValueError(f"Unknown lookup kind '{lookup.kind}'")
