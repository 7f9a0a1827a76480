from pydantic import BaseModel
from typing import Optional


class Submission(BaseModel):
    image: bytes
    brief: str
    filename: Optional[str] = None
    content_type: Optional[str] = None


class AnalysisResult(BaseModel):
    designAnalysis: Optional[str] = None
    copyAnalysis: Optional[str] = None
    campaignOutline: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
