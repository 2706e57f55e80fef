"""Program proxy routes.

GET    /programs               - List programs
POST   /programs               - Create a program
GET    /programs/{program_id}  - Get a program
PATCH  /programs/{program_id}  - Update a program
DELETE /programs/{program_id}  - Delete a program
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from poynts_gateway.app.api.auth import require_domain_permission
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.models.proxy import ProxyRequest
from poynts_gateway.app.permissions import Domain
from poynts_gateway.app.proxy.client import extract_query_params, path_segment, require_body

router = APIRouter(prefix="/programs", tags=["programs"])

ProgramsCaller = Annotated[CallerIdentity, Depends(require_domain_permission(Domain.PROGRAMS))]


@router.get("")
async def list_programs(request: Request, caller: ProgramsCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="GET", path="/programs", query_params=extract_query_params(request)),
        caller,
    )


@router.post("")
async def create_program(request: Request, caller: ProgramsCaller, proxy: Proxy) -> Response:
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path="/programs", body=body),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{program_id}")
async def get_program(program_id: str, caller: ProgramsCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="GET", path=f"/v1/programs/{path_segment(program_id)}"), caller
    )


@router.patch("/{program_id}")
async def update_program(
    program_id: str, request: Request, caller: ProgramsCaller, proxy: Proxy
) -> Response:
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="PATCH", path=f"/v1/programs/{path_segment(program_id)}", body=body),
        caller,
    )


@router.delete("/{program_id}")
async def delete_program(program_id: str, caller: ProgramsCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="DELETE", path=f"/v1/programs/{path_segment(program_id)}"),
        caller,
        success_status=status.HTTP_204_NO_CONTENT,
    )
