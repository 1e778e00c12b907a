from fastapi import APIRouter, Depends

from feedback_hub.api.dependencies import get_caller, get_hub
from feedback_hub.client.feedback_hub import FeedbackHub
from feedback_hub.domains import Caller
from feedback_hub.domains.base import utcnow

router = APIRouter()


@router.get("")
async def get_insights(
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    insights = await hub.insights_service.generate(caller)
    status = hub.insights_service.status()
    return {
        "insights": insights.model_dump(by_alias=True, mode="json"),
        "generatedAt": utcnow().isoformat(),
        "aiEnabled": status.ai_enabled,
    }


@router.get("/status")
async def insights_status(
    caller: Caller = Depends(get_caller),
    hub: FeedbackHub = Depends(get_hub),
):
    return hub.insights_service.status().model_dump(by_alias=True, mode="json")
