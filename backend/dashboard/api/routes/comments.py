"""Comments API routes."""

from fastapi import APIRouter, Depends, Request, Response, status

from dashboard.auth import Identity, get_current_identity, require_admin
from dashboard.database import (
    get_comment_repository,
    get_project_repository,
    get_user_repository,
)
from dashboard.database.repositories import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from dashboard.schemas import CommentResponse, CreateCommentRequest, UpdateCommentRequest
from dashboard.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["Comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(comments: CommentRepository = Depends(get_comment_repository)):
    return [CommentResponse.model_validate(c) for c in await comment_service.list_comments(comments)]


@router.get("/project/{project_id}", response_model=list[CommentResponse])
async def list_project_comments(
    project_id: str,
    comments: CommentRepository = Depends(get_comment_repository),
):
    """All comments on a project, approved or not."""
    found = await comment_service.list_project_comments(comments, project_id)
    return [CommentResponse.model_validate(c) for c in found]


@router.get("/project/{project_id}/approved", response_model=list[CommentResponse])
async def list_approved_comments(
    project_id: str,
    comments: CommentRepository = Depends(get_comment_repository),
):
    """Approved comments on a project."""
    found = await comment_service.list_approved_comments(comments, project_id)
    return [CommentResponse.model_validate(c) for c in found]


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: str,
    comments: CommentRepository = Depends(get_comment_repository),
):
    comment = await comment_service.get_comment(comments, comment_id)
    return CommentResponse.model_validate(comment)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    body: CreateCommentRequest,
    request: Request,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    comments: CommentRepository = Depends(get_comment_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    users: UserRepository = Depends(get_user_repository),
):
    """Post a comment as the authenticated user."""
    comment = await comment_service.create_comment(comments, projects, users, body, identity)
    response.headers["Location"] = str(request.url_for("get_comment", comment_id=comment.id))
    return CommentResponse.model_validate(comment)


@router.put("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_comment(
    comment_id: str,
    body: UpdateCommentRequest,
    identity: Identity = Depends(get_current_identity),
    comments: CommentRepository = Depends(get_comment_repository),
):
    await comment_service.update_comment(comments, comment_id, body, identity)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    identity: Identity = Depends(get_current_identity),
    comments: CommentRepository = Depends(get_comment_repository),
):
    await comment_service.delete_comment(comments, comment_id, identity)


@router.patch("/{comment_id}/approve", status_code=status.HTTP_204_NO_CONTENT)
async def approve_comment(
    comment_id: str,
    _: Identity = Depends(require_admin),
    comments: CommentRepository = Depends(get_comment_repository),
):
    await comment_service.set_approval(comments, comment_id, approved=True)


@router.patch("/{comment_id}/unapprove", status_code=status.HTTP_204_NO_CONTENT)
async def unapprove_comment(
    comment_id: str,
    _: Identity = Depends(require_admin),
    comments: CommentRepository = Depends(get_comment_repository),
):
    await comment_service.set_approval(comments, comment_id, approved=False)
