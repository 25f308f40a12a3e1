"""Repositories for groups, events and programs."""

from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select

from src.app.models import (
    Event,
    EventRsvp,
    Group,
    GroupMembership,
    MembershipRole,
    Program,
    ProgramAssignment,
    ProgramEnrollment,
    ProgramModule,
)
from src.app.repositories.base import TenantScopedRepository


class GroupRepository(TenantScopedRepository[Group]):
    model = Group


class GroupMembershipRepository(TenantScopedRepository[GroupMembership]):
    model = GroupMembership

    async def join(self, tenant_id: UUID, group_id: UUID, user_id: UUID) -> GroupMembership:
        """Idempotent: joining twice leaves one row and keeps the existing role."""
        return await self.upsert(
            {
                "tenant_id": tenant_id,
                "group_id": group_id,
                "user_id": user_id,
                "role": MembershipRole.MEMBER.value,
            },
            conflict_keys=["group_id", "user_id"],
        )

    async def leave(self, tenant_id: UUID, group_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            delete(GroupMembership).where(
                GroupMembership.tenant_id == tenant_id,
                GroupMembership.group_id == group_id,
                GroupMembership.user_id == user_id,
            )
        )
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]

    async def list_for_group(self, tenant_id: UUID, group_id: UUID) -> list[GroupMembership]:
        return await self.list_all_scoped(tenant_id, GroupMembership.group_id == group_id)


class EventRepository(TenantScopedRepository[Event]):
    model = Event


class EventRsvpRepository(TenantScopedRepository[EventRsvp]):
    model = EventRsvp

    async def upsert_rsvp(
        self, tenant_id: UUID, event_id: UUID, user_id: UUID, status: str
    ) -> EventRsvp:
        return await self.upsert(
            {"tenant_id": tenant_id, "event_id": event_id, "user_id": user_id, "status": status},
            conflict_keys=["tenant_id", "event_id", "user_id"],
            update_values={"status": status},
        )

    async def count_by_status(self, tenant_id: UUID, event_id: UUID) -> dict[str, int]:
        result = await self.session.execute(
            select(EventRsvp.status, func.count())
            .where(EventRsvp.tenant_id == tenant_id, EventRsvp.event_id == event_id)
            .group_by(EventRsvp.status)
        )
        return {status: int(count) for status, count in result.all()}


class ProgramRepository(TenantScopedRepository[Program]):
    model = Program


class ProgramModuleRepository(TenantScopedRepository[ProgramModule]):
    model = ProgramModule

    async def list_for_program(self, tenant_id: UUID, program_id: UUID) -> list[ProgramModule]:
        result = await self.session.execute(
            select(ProgramModule)
            .where(ProgramModule.tenant_id == tenant_id, ProgramModule.program_id == program_id)
            .order_by(ProgramModule.order, ProgramModule.created_at)
        )
        return list(result.scalars().all())


class ProgramAssignmentRepository(TenantScopedRepository[ProgramAssignment]):
    model = ProgramAssignment

    async def assign(self, tenant_id: UUID, program_id: UUID, group_id: UUID) -> ProgramAssignment:
        return await self.upsert(
            {"tenant_id": tenant_id, "program_id": program_id, "group_id": group_id},
            conflict_keys=["tenant_id", "program_id", "group_id"],
        )

    async def unassign(self, tenant_id: UUID, program_id: UUID, group_id: UUID) -> bool:
        result = await self.session.execute(
            delete(ProgramAssignment).where(
                ProgramAssignment.tenant_id == tenant_id,
                ProgramAssignment.program_id == program_id,
                ProgramAssignment.group_id == group_id,
            )
        )
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]

    async def program_ids_for_group(self, tenant_id: UUID, group_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(ProgramAssignment.program_id).where(
                ProgramAssignment.tenant_id == tenant_id,
                ProgramAssignment.group_id == group_id,
            )
        )
        return list(result.scalars().all())


class ProgramEnrollmentRepository(TenantScopedRepository[ProgramEnrollment]):
    model = ProgramEnrollment

    async def enroll(self, tenant_id: UUID, program_id: UUID, user_id: UUID) -> ProgramEnrollment:
        return await self.upsert(
            {
                "tenant_id": tenant_id,
                "program_id": program_id,
                "user_id": user_id,
                "progress_pct": 0,
            },
            conflict_keys=["tenant_id", "program_id", "user_id"],
        )
