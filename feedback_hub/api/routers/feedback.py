"""
Feedback lifecycle routes.

Bodies and query parameters are passed through untyped so the lifecycle
service reports every violated field in a single response.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from feedback_hub.api.dependencies import get_caller, get_hub, get_request_metadata
from feedback_hub.client.feedback_hub import FeedbackHub
from feedback_hub.domains import Caller, FeedbackMetadata

router = APIRouter()


def _dump(model) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


@router.post("", status_code=201)
async def create_feedback(
    payload: Dict[str, Any] = Body(...),
    caller: Caller = Depends(get_caller),
    metadata: FeedbackMetadata = Depends(get_request_metadata),
    hub: FeedbackHub = Depends(get_hub),
):
    feedback = await hub.feedback_service.create_feedback(
        author_id=caller.id,
        title=payload.get("title"),
        message=payload.get("message"),
        category=payload.get("category"),
        priority=payload.get("priority"),
        tags=payload.get("tags"),
        metadata=metadata,
    )
    return {"message": "Feedback submitted successfully", "feedback": _dump(feedback)}


@router.get("")
async def list_feedback(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sentiment: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    result = await hub.feedback_service.list_feedback(
        caller,
        page=page,
        limit=limit,
        category=category,
        status=status,
        priority=priority,
        sentiment=sentiment,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return {
        "feedback": [_dump(item) for item in result.items],
        "pagination": _dump(result.pagination),
    }


@router.get("/stats")
async def feedback_stats(
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    stats = await hub.feedback_service.stats(caller)
    body = _dump(stats)
    recent = body.pop("recent")
    return {"stats": body, "recentFeedback": recent}


@router.get("/{feedback_id}")
async def get_feedback(
    feedback_id: str,
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    feedback = await hub.feedback_service.get_feedback(feedback_id, caller)
    return {"feedback": _dump(feedback)}


@router.patch("/{feedback_id}/status")
async def update_status(
    feedback_id: str,
    payload: Dict[str, Any] = Body(...),
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    feedback = await hub.feedback_service.update_status(
        feedback_id,
        status=payload.get("status"),
        actor=caller,
        response=payload.get("response"),
    )
    return {"message": "Feedback updated successfully", "feedback": _dump(feedback)}


@router.patch("/{feedback_id}/resolve")
async def resolve_feedback(
    feedback_id: str,
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    feedback = await hub.feedback_service.resolve(feedback_id, caller)
    return {"message": "Feedback marked as resolved", "feedback": _dump(feedback)}


@router.delete("/{feedback_id}")
async def delete_feedback(
    feedback_id: str,
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    await hub.feedback_service.delete_feedback(feedback_id, caller)
    return {"message": "Feedback deleted successfully"}
