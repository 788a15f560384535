from pydantic import BaseModel, Field


class QuickRecommendRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=50000, description="Plain text resume content")
