"""Project endpoints - submission, review workflow and bulk operations."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Query, UploadFile, status

from src.projecthub.api.dependencies import (
    AdminActor,
    BulkOperationServiceDep,
    CurrentActor,
    ProjectServiceDep,
    ReviewerActor,
    WorkflowServiceDep,
)
from src.projecthub.models import ProjectStatus
from src.projecthub.schemas.bulk import BulkOperationResponse, BulkProjectRequest
from src.projecthub.schemas.pagination import PaginatedResponse
from src.projecthub.schemas.project import (
    HistoryEntryRead,
    ProjectCreate,
    ProjectRead,
    ProjectSearchParams,
    ProjectSearchResponse,
    ProjectUpdate,
    SearchFilters,
    SearchSortField,
    SortOrder,
    StatusUpdateRequest,
    TransitionResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description=(
        "Admins see every project, teachers the projects they supervise, "
        "students their own submissions."
    ),
)
async def list_projects(
    actor: CurrentActor,
    service: ProjectServiceDep,
    status_filter: Annotated[ProjectStatus | None, Query(alias="status")] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await service.list_projects(
        actor, status=status_filter, cursor=cursor, limit=limit
    )
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit project",
    responses={
        201: {"description": "Project submitted with status pending"},
        400: {"description": "Invalid body or supervisor is not an active teacher"},
    },
)
async def create_project(
    data: ProjectCreate, actor: CurrentActor, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.create_project(data, actor)
    return ProjectRead.model_validate(project)


@router.get(
    "/search",
    response_model=ProjectSearchResponse,
    summary="Search projects",
    description=(
        "Case-insensitive text search over title, description and sustainability, "
        "narrowed to the projects the caller may list."
    ),
)
async def search_projects(
    actor: CurrentActor,
    service: ProjectServiceDep,
    query: Annotated[str | None, Query(max_length=100)] = None,
    status_filter: Annotated[ProjectStatus | None, Query(alias="status")] = None,
    supervisor: Annotated[UUID | None, Query(description="Supervisor or co-supervisor")] = None,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
    sort_by: Annotated[SearchSortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> ProjectSearchResponse:
    params = ProjectSearchParams(
        query=query,
        status=status_filter,
        supervisor_id=supervisor,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return await service.search_projects(actor, params)


@router.get("/search/filters", response_model=SearchFilters, summary="Search filter values")
async def search_filters(actor: CurrentActor, service: ProjectServiceDep) -> SearchFilters:
    return await service.search_filters(actor)


@router.put(
    "/bulk",
    response_model=BulkOperationResponse,
    response_model_exclude_none=True,
    summary="Bulk update or delete projects",
    responses={
        200: {"description": "Per-project results and summary"},
        400: {"description": "Missing ids, unknown action or invalid status"},
        403: {"description": "Admin role required"},
    },
)
async def bulk_update_projects(
    data: BulkProjectRequest, actor: AdminActor, service: BulkOperationServiceDep
) -> BulkOperationResponse:
    return await service.bulk_apply(
        data.project_ids,
        data.action,
        actor,
        status=data.status,
        comment=data.comment,
    )


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID, actor: CurrentActor, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.get_project(project_id, actor)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Edit project",
    description="Owner edit of project fields. Status cannot be changed here.",
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    actor: CurrentActor,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.update_project(project_id, data, actor)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID, actor: CurrentActor, service: ProjectServiceDep
) -> None:
    await service.delete_project(project_id, actor)


@router.post(
    "/{project_id}/image",
    response_model=ProjectRead,
    summary="Upload project image",
    responses={
        400: {"description": "Not an image or too large"},
        502: {"description": "Image storage failed"},
    },
)
async def upload_project_image(
    project_id: UUID,
    actor: CurrentActor,
    service: ProjectServiceDep,
    image: Annotated[UploadFile, File(description="Project image")],
) -> ProjectRead:
    content = await image.read()
    project = await service.upload_image(
        project_id,
        image.filename or "image",
        image.content_type,
        content,
        actor,
    )
    return ProjectRead.model_validate(project)


@router.put(
    "/{project_id}/status",
    response_model=TransitionResponse,
    summary="Change project status",
    responses={
        200: {"description": "Status changed and history appended"},
        400: {"description": "Invalid status value"},
        403: {"description": "Admin or teacher role required"},
        404: {"description": "Project not found"},
        409: {"description": "Concurrent updates exhausted retries"},
    },
)
async def update_project_status(
    project_id: str,
    data: StatusUpdateRequest,
    actor: ReviewerActor,
    service: WorkflowServiceDep,
) -> TransitionResponse:
    result = await service.transition_status(
        project_id,
        data.status,
        data.comment,
        actor,
        send_email=data.send_email,
    )
    project = result.project
    return TransitionResponse(
        project_id=project.id,
        status=ProjectStatus(project.status),
        status_history=[HistoryEntryRead.model_validate(h) for h in result.history],
        last_reviewed_at=project.last_reviewed_at,
        last_reviewed_by=project.last_reviewed_by,
        last_feedback=project.last_feedback,
    )


@router.get(
    "/{project_id}/status-history",
    response_model=list[HistoryEntryRead],
    summary="Project status history, most recent first",
)
async def get_status_history(
    project_id: str, actor: CurrentActor, service: WorkflowServiceDep
) -> list[HistoryEntryRead]:
    history = await service.get_status_history(project_id, actor)
    return [HistoryEntryRead.model_validate(h) for h in history]
