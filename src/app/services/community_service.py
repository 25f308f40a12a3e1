"""Groups, events and programs."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from src.app.core.exceptions import NotFound
from src.app.core.logging import get_logger
from src.app.models import (
    Event,
    EventRsvp,
    Group,
    GroupMembership,
    Program,
    ProgramAssignment,
    ProgramEnrollment,
    ProgramModule,
    Resource,
)
from src.app.repositories import (
    BlobStore,
    EventRepository,
    EventRsvpRepository,
    GroupMembershipRepository,
    GroupRepository,
    ProgramAssignmentRepository,
    ProgramEnrollmentRepository,
    ProgramModuleRepository,
    ProgramRepository,
    ResourceRepository,
)
from src.app.schemas.community import (
    EventCreate,
    EventDetail,
    EventUpdate,
    ModuleCreate,
    ModuleDetail,
    ModuleRead,
    ModuleUpdate,
    ProgramDetail,
)
from src.app.schemas.content import ResourceRead
from src.app.services.content_service import require_file_in_tenant, require_in_tenant
from src.app.services.file_service import file_url

logger = get_logger(__name__)


class CommunityService:
    def __init__(
        self,
        group_repo: GroupRepository,
        group_member_repo: GroupMembershipRepository,
        event_repo: EventRepository,
        rsvp_repo: EventRsvpRepository,
        program_repo: ProgramRepository,
        module_repo: ProgramModuleRepository,
        assignment_repo: ProgramAssignmentRepository,
        enrollment_repo: ProgramEnrollmentRepository,
        resource_repo: ResourceRepository,
        store: BlobStore,
        session: AsyncSession,
    ):
        self.group_repo = group_repo
        self.group_member_repo = group_member_repo
        self.event_repo = event_repo
        self.rsvp_repo = rsvp_repo
        self.program_repo = program_repo
        self.module_repo = module_repo
        self.assignment_repo = assignment_repo
        self.enrollment_repo = enrollment_repo
        self.resource_repo = resource_repo
        self.store = store
        self.session = session

    # Groups

    async def list_groups(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Group], str | None, bool]:
        return await self.group_repo.list_scoped(tenant_id, cursor=cursor, limit=limit)

    async def get_group(self, tenant_id: UUID, group_id: UUID) -> Group:
        return await require_in_tenant(self.group_repo, tenant_id, group_id, "Group")

    async def create_group(
        self, tenant_id: UUID, values: dict[str, Any], created_by_user_id: UUID
    ) -> Group:
        group = Group(tenant_id=tenant_id, created_by_user_id=created_by_user_id, **values)
        self.group_repo.add(group)
        await self.session.commit()
        await self.session.refresh(group)
        logger.info("Group created", tenant_id=str(tenant_id), group_id=str(group.id))
        return group

    async def update_group(self, tenant_id: UUID, group_id: UUID, changes: dict[str, Any]) -> Group:
        group = await self.group_repo.update_scoped(tenant_id, group_id, changes)
        if group is None:
            raise NotFound("Group not found")
        await self.session.commit()
        return group

    async def list_group_members(self, tenant_id: UUID, group_id: UUID) -> list[GroupMembership]:
        await self.get_group(tenant_id, group_id)
        return await self.group_member_repo.list_for_group(tenant_id, group_id)

    async def join_group(self, tenant_id: UUID, group_id: UUID, user_id: UUID) -> GroupMembership:
        await self.get_group(tenant_id, group_id)
        membership = await self.group_member_repo.join(tenant_id, group_id, user_id)
        await self.session.commit()
        logger.info(
            "Group joined", tenant_id=str(tenant_id), group_id=str(group_id), user_id=str(user_id)
        )
        return membership

    async def leave_group(self, tenant_id: UUID, group_id: UUID, user_id: UUID) -> None:
        """Leaving a group you are not in is a no-op."""
        await self.get_group(tenant_id, group_id)
        await self.group_member_repo.leave(tenant_id, group_id, user_id)
        await self.session.commit()

    async def remove_group_member(self, tenant_id: UUID, group_id: UUID, user_id: UUID) -> None:
        await self.get_group(tenant_id, group_id)
        if not await self.group_member_repo.leave(tenant_id, group_id, user_id):
            raise NotFound("Group membership not found")
        await self.session.commit()

    async def list_group_programs(self, tenant_id: UUID, group_id: UUID) -> list[Program]:
        await self.get_group(tenant_id, group_id)
        program_ids = await self.assignment_repo.program_ids_for_group(tenant_id, group_id)
        if not program_ids:
            return []
        return await self.program_repo.list_all_scoped(tenant_id, col(Program.id).in_(program_ids))

    async def list_group_resources(self, tenant_id: UUID, group_id: UUID) -> list[Resource]:
        await self.get_group(tenant_id, group_id)
        return await self.resource_repo.list_all_scoped(tenant_id, Resource.group_id == group_id)

    # Events

    async def list_events(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Event], str | None, bool]:
        return await self.event_repo.list_scoped(tenant_id, cursor=cursor, limit=limit)

    async def get_event(self, tenant_id: UUID, event_id: UUID) -> EventDetail:
        event = await require_in_tenant(self.event_repo, tenant_id, event_id, "Event")
        counts = await self.rsvp_repo.count_by_status(tenant_id, event_id)
        return EventDetail.model_validate(event).model_copy(update={"rsvp_counts": counts})

    async def _thumbnail(self, tenant_id: UUID, values: dict[str, Any]) -> None:
        if values.get("thumbnail_file_id") is not None:
            thumb = await require_file_in_tenant(self.store, tenant_id, values["thumbnail_file_id"])
            values["thumbnail_url"] = file_url(tenant_id, thumb.id)

    async def create_event(self, tenant_id: UUID, data: EventCreate, host_user_id: UUID) -> Event:
        values = data.model_dump()
        await self._thumbnail(tenant_id, values)
        event = Event(tenant_id=tenant_id, host_user_id=host_user_id, **values)
        self.event_repo.add(event)
        await self.session.commit()
        await self.session.refresh(event)
        logger.info("Event created", tenant_id=str(tenant_id), event_id=str(event.id))
        return event

    async def update_event(self, tenant_id: UUID, event_id: UUID, data: EventUpdate) -> Event:
        changes = data.model_dump(exclude_unset=True)
        await self._thumbnail(tenant_id, changes)
        event = await self.event_repo.update_scoped(tenant_id, event_id, changes)
        if event is None:
            raise NotFound("Event not found")
        await self.session.commit()
        return event

    async def delete_event(self, tenant_id: UUID, event_id: UUID) -> None:
        if not await self.event_repo.delete_scoped(tenant_id, event_id):
            raise NotFound("Event not found")
        await self.session.commit()

    async def rsvp(self, tenant_id: UUID, event_id: UUID, user_id: UUID, status: str) -> EventRsvp:
        await require_in_tenant(self.event_repo, tenant_id, event_id, "Event")
        rsvp = await self.rsvp_repo.upsert_rsvp(tenant_id, event_id, user_id, status)
        await self.session.commit()
        logger.info(
            "Event RSVP",
            tenant_id=str(tenant_id),
            event_id=str(event_id),
            user_id=str(user_id),
            status=status,
        )
        return rsvp

    # Programs

    async def list_programs(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Program], str | None, bool]:
        return await self.program_repo.list_scoped(tenant_id, cursor=cursor, limit=limit)

    async def get_program(self, tenant_id: UUID, program_id: UUID) -> ProgramDetail:
        program = await require_in_tenant(self.program_repo, tenant_id, program_id, "Program")
        modules = await self.module_repo.list_for_program(tenant_id, program_id)
        return ProgramDetail.model_validate(program).model_copy(
            update={"modules": [ModuleRead.model_validate(m) for m in modules]}
        )

    async def create_program(
        self, tenant_id: UUID, values: dict[str, Any], created_by_user_id: UUID
    ) -> Program:
        program = Program(tenant_id=tenant_id, created_by_user_id=created_by_user_id, **values)
        self.program_repo.add(program)
        await self.session.commit()
        await self.session.refresh(program)
        logger.info("Program created", tenant_id=str(tenant_id), program_id=str(program.id))
        return program

    async def update_program(
        self, tenant_id: UUID, program_id: UUID, changes: dict[str, Any]
    ) -> Program:
        program = await self.program_repo.update_scoped(tenant_id, program_id, changes)
        if program is None:
            raise NotFound("Program not found")
        await self.session.commit()
        return program

    async def _get_module(
        self, tenant_id: UUID, program_id: UUID, module_id: UUID
    ) -> ProgramModule:
        module = await self.module_repo.get_scoped(tenant_id, module_id)
        if module is None or module.program_id != program_id:
            raise NotFound("Module not found")
        return module

    async def get_module(self, tenant_id: UUID, program_id: UUID, module_id: UUID) -> ModuleDetail:
        module = await self._get_module(tenant_id, program_id, module_id)
        resources = await self.resource_repo.list_all_scoped(
            tenant_id, Resource.module_id == module_id
        )
        return ModuleDetail.model_validate(module).model_copy(
            update={"resources": [ResourceRead.model_validate(r) for r in resources]}
        )

    async def create_module(
        self, tenant_id: UUID, program_id: UUID, data: ModuleCreate
    ) -> ProgramModule:
        await require_in_tenant(self.program_repo, tenant_id, program_id, "Program")
        module = ProgramModule(tenant_id=tenant_id, program_id=program_id, **data.model_dump())
        self.module_repo.add(module)
        await self.session.commit()
        await self.session.refresh(module)
        return module

    async def update_module(
        self, tenant_id: UUID, program_id: UUID, module_id: UUID, data: ModuleUpdate
    ) -> ProgramModule:
        await self._get_module(tenant_id, program_id, module_id)
        module = await self.module_repo.update_scoped(
            tenant_id, module_id, data.model_dump(exclude_unset=True)
        )
        if module is None:
            raise NotFound("Module not found")
        await self.session.commit()
        return module

    async def delete_module(self, tenant_id: UUID, program_id: UUID, module_id: UUID) -> None:
        """Delete a module. Its resources survive, detached from module and program."""
        await self._get_module(tenant_id, program_id, module_id)
        await self.resource_repo.detach_module(tenant_id, module_id)
        await self.module_repo.delete_scoped(tenant_id, module_id)
        await self.session.commit()
        logger.info("Module deleted", tenant_id=str(tenant_id), module_id=str(module_id))

    async def add_module_resource(
        self, tenant_id: UUID, program_id: UUID, module_id: UUID, resource_id: UUID
    ) -> Resource:
        await require_in_tenant(self.resource_repo, tenant_id, resource_id, "Resource")
        await self._get_module(tenant_id, program_id, module_id)
        resource = await self.resource_repo.update_scoped(
            tenant_id, resource_id, {"module_id": module_id, "program_id": program_id}
        )
        if resource is None:
            raise NotFound("Resource not found")
        await self.session.commit()
        return resource

    async def remove_module_resource(
        self, tenant_id: UUID, program_id: UUID, module_id: UUID, resource_id: UUID
    ) -> Resource:
        await self._get_module(tenant_id, program_id, module_id)
        current = await self.resource_repo.get_scoped(tenant_id, resource_id)
        if current is None or current.module_id != module_id:
            raise NotFound("Resource not found or not in this module")
        resource = await self.resource_repo.update_scoped(
            tenant_id, resource_id, {"module_id": None, "program_id": None}
        )
        if resource is None:
            raise NotFound("Resource not found or not in this module")
        await self.session.commit()
        return resource

    async def assign_program(
        self, tenant_id: UUID, program_id: UUID, group_id: UUID
    ) -> ProgramAssignment:
        await require_in_tenant(self.program_repo, tenant_id, program_id, "Program")
        await require_in_tenant(self.group_repo, tenant_id, group_id, "Group")
        assignment = await self.assignment_repo.assign(tenant_id, program_id, group_id)
        await self.session.commit()
        logger.info(
            "Program assigned",
            tenant_id=str(tenant_id),
            program_id=str(program_id),
            group_id=str(group_id),
        )
        return assignment

    async def unassign_program(self, tenant_id: UUID, program_id: UUID, group_id: UUID) -> None:
        if not await self.assignment_repo.unassign(tenant_id, program_id, group_id):
            raise NotFound("Assignment not found")
        await self.session.commit()

    async def enroll(self, tenant_id: UUID, program_id: UUID, user_id: UUID) -> ProgramEnrollment:
        await require_in_tenant(self.program_repo, tenant_id, program_id, "Program")
        enrollment = await self.enrollment_repo.enroll(tenant_id, program_id, user_id)
        await self.session.commit()
        return enrollment
