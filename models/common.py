# models/common.py
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints

RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
Rating = Annotated[float, Field(ge=0, le=10)]


class AnswerIn(BaseModel):
    questionNo: int
    answer: RequiredStr


class Resource(BaseModel):
    type: Optional[TrimmedStr] = None
    link: Optional[TrimmedStr] = None


class ReviewFields(BaseModel):
    """Teacher review overlay. Only the fields present in the request are applied."""
    studentCode: RequiredStr
    overallScore: Optional[float] = None
    teacherComments: Optional[TrimmedStr] = None
    summary: Optional[TrimmedStr] = None
    needPractice: List[str] = []
    topicUnderCovered: List[str] = []
    resources: List[Resource] = []

    def overlay(self) -> dict:
        return self.model_dump(exclude_unset=True)
