# foodchef/api/endpoints/feedback.py
from fastapi import APIRouter, Depends

from foodchef.api.deps import get_feedback_manager, unwrap
from foodchef.models.schemas import FeedbackCreate
from foodchef.services.feedback_manager import FeedbackManager

router = APIRouter()


@router.post("")
def submit_feedback(body: FeedbackCreate, feedback: FeedbackManager = Depends(get_feedback_manager)):
    return unwrap(feedback.submit_feedback(body))
