"""Tenant program, module, assignment and enrollment endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import CommunityServiceDep, MemberAccess, ModeratorAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.community import (
    AssignmentRead,
    AssignmentRequest,
    EnrollmentRead,
    ModuleCreate,
    ModuleDetail,
    ModuleRead,
    ModuleResourceRequest,
    ModuleUpdate,
    ProgramCreate,
    ProgramDetail,
    ProgramRead,
    ProgramUpdate,
)
from src.app.schemas.content import ResourceRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/programs", tags=["programs"])

_PROGRAM_NOT_FOUND = {404: {"description": "Program not found"}}
_MODULE_NOT_FOUND = {404: {"description": "Program or module not found"}}


@router.get("", response_model=PaginatedResponse[ProgramRead])
async def list_programs(
    access: MemberAccess,
    community: CommunityServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[ProgramRead]:
    page = await community.list_programs(access.tenant_id, cursor, limit)
    return PaginatedResponse.from_page(page, ProgramRead.model_validate)


@router.post("", response_model=ProgramRead, status_code=status.HTTP_201_CREATED)
async def create_program(
    data: ProgramCreate, access: ModeratorAccess, community: CommunityServiceDep
) -> ProgramRead:
    program = await community.create_program(access.tenant_id, data.model_dump(), access.user_id)
    return ProgramRead.model_validate(program)


@router.get("/{program_id}", response_model=ProgramDetail, responses=_PROGRAM_NOT_FOUND)
async def get_program(
    program_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> ProgramDetail:
    """Program with its modules in order."""
    return await community.get_program(access.tenant_id, program_id)


@router.put("/{program_id}", response_model=ProgramRead, responses=_PROGRAM_NOT_FOUND)
async def update_program(
    program_id: UUID, data: ProgramUpdate, access: ModeratorAccess, community: CommunityServiceDep
) -> ProgramRead:
    program = await community.update_program(
        access.tenant_id, program_id, data.model_dump(exclude_unset=True)
    )
    return ProgramRead.model_validate(program)


@router.post("/{program_id}/enroll", response_model=EnrollmentRead, responses=_PROGRAM_NOT_FOUND)
async def enroll(
    program_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> EnrollmentRead:
    """Enroll the caller. Enrolling again returns the existing enrollment."""
    enrollment = await community.enroll(access.tenant_id, program_id, access.user_id)
    return EnrollmentRead.model_validate(enrollment)


# Assignments


@router.post(
    "/{program_id}/assignments",
    response_model=AssignmentRead,
    responses={404: {"description": "Program or group not found"}},
)
async def assign_program(
    program_id: UUID,
    data: AssignmentRequest,
    access: ModeratorAccess,
    community: CommunityServiceDep,
) -> AssignmentRead:
    """Assign the program to a group of the same tenant. Idempotent."""
    assignment = await community.assign_program(access.tenant_id, program_id, data.group_id)
    return AssignmentRead.model_validate(assignment)


@router.delete(
    "/{program_id}/assignments/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Assignment not found"}},
)
async def unassign_program(
    program_id: UUID, group_id: UUID, access: ModeratorAccess, community: CommunityServiceDep
) -> None:
    await community.unassign_program(access.tenant_id, program_id, group_id)


# Modules


@router.post(
    "/{program_id}/modules",
    response_model=ModuleRead,
    status_code=status.HTTP_201_CREATED,
    responses=_PROGRAM_NOT_FOUND,
)
async def create_module(
    program_id: UUID, data: ModuleCreate, access: ModeratorAccess, community: CommunityServiceDep
) -> ModuleRead:
    module = await community.create_module(access.tenant_id, program_id, data)
    return ModuleRead.model_validate(module)


@router.get(
    "/{program_id}/modules/{module_id}", response_model=ModuleDetail, responses=_MODULE_NOT_FOUND
)
async def get_module(
    program_id: UUID, module_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> ModuleDetail:
    """Module with the resources attached to it."""
    return await community.get_module(access.tenant_id, program_id, module_id)


@router.put(
    "/{program_id}/modules/{module_id}", response_model=ModuleRead, responses=_MODULE_NOT_FOUND
)
async def update_module(
    program_id: UUID,
    module_id: UUID,
    data: ModuleUpdate,
    access: ModeratorAccess,
    community: CommunityServiceDep,
) -> ModuleRead:
    module = await community.update_module(access.tenant_id, program_id, module_id, data)
    return ModuleRead.model_validate(module)


@router.delete(
    "/{program_id}/modules/{module_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_MODULE_NOT_FOUND,
)
async def delete_module(
    program_id: UUID, module_id: UUID, access: ModeratorAccess, community: CommunityServiceDep
) -> None:
    """Delete a module. Its resources stay in the library, detached from the program."""
    await community.delete_module(access.tenant_id, program_id, module_id)


@router.post(
    "/{program_id}/modules/{module_id}/resources",
    response_model=ResourceRead,
    responses={404: {"description": "Program, module or resource not found"}},
)
async def add_module_resource(
    program_id: UUID,
    module_id: UUID,
    data: ModuleResourceRequest,
    access: ModeratorAccess,
    community: CommunityServiceDep,
) -> ResourceRead:
    resource = await community.add_module_resource(
        access.tenant_id, program_id, module_id, data.resource_id
    )
    return ResourceRead.model_validate(resource)


@router.delete(
    "/{program_id}/modules/{module_id}/resources/{resource_id}",
    response_model=ResourceRead,
    responses={404: {"description": "Resource not found or not in this module"}},
)
async def remove_module_resource(
    program_id: UUID,
    module_id: UUID,
    resource_id: UUID,
    access: ModeratorAccess,
    community: CommunityServiceDep,
) -> ResourceRead:
    """Detach a resource from the module. The resource itself is kept."""
    resource = await community.remove_module_resource(
        access.tenant_id, program_id, module_id, resource_id
    )
    return ResourceRead.model_validate(resource)
