# models/assignment.py
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from models.common import AnswerIn, Rating, RequiredStr, ReviewFields, TrimmedStr


class AssignmentQuestion(BaseModel):
    questionNo: Optional[int] = None  # taken from the map key when missing
    question: RequiredStr
    difficulties: Optional[TrimmedStr] = None


class AssignmentCreate(BaseModel):
    teacherCode: RequiredStr
    assignmentName: RequiredStr
    subject: RequiredStr
    dueDate: datetime
    assignedTo: RequiredStr
    questions: Dict[str, AssignmentQuestion] = {}


class AssignmentSubmit(BaseModel):
    assignmentCode: RequiredStr
    studentCode: RequiredStr
    answers: List[AnswerIn] = Field(min_length=1)


class AssignmentReview(ReviewFields):
    assignmentCode: RequiredStr
    questionRatings: Optional[Dict[str, Rating]] = None  # {"q1": 6} or {"1": 6}
