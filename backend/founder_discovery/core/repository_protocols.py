"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Repositories speak core dataclasses (Project, Assumption, Interview), not ORM rows
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the pure functions that consume
      their snapshots are never async; the shell orchestrates around the pure logic
"""

from typing import Protocol

from founder_discovery.core.entities import Assumption, Interview, Project


class ProjectRepository(Protocol):
    """Contract for project persistence: implemented by shell."""
    async def add(self, project: Project) -> Project: ...
    async def get(self, project_id: str) -> Project | None: ...
    async def save(self, project: Project) -> Project: ...
    async def delete(self, project_id: str) -> None: ...


class AssumptionRepository(Protocol):
    """Contract for assumption persistence: implemented by shell."""
    async def list_by_project(self, project_id: str) -> list[Assumption]: ...
    async def get(self, project_id: str, assumption_id: str) -> Assumption | None: ...
    async def add(self, project_id: str, assumption: Assumption) -> Assumption: ...
    async def save(self, project_id: str, assumption: Assumption) -> Assumption: ...
    async def delete(self, project_id: str, assumption_id: str) -> None: ...


class InterviewRepository(Protocol):
    """Contract for interview persistence: implemented by shell."""
    async def list_by_project(self, project_id: str) -> list[Interview]: ...
    async def get(self, project_id: str, interview_id: str) -> Interview | None: ...
    async def add(self, project_id: str, interview: Interview) -> Interview: ...
    async def save(self, project_id: str, interview: Interview) -> Interview: ...
    async def delete(self, project_id: str, interview_id: str) -> None: ...
