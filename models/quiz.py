# models/quiz.py
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from models.common import AnswerIn, RequiredStr, ReviewFields, TrimmedStr


class QuizOptions(BaseModel):
    op1: RequiredStr
    op2: RequiredStr
    op3: RequiredStr
    op4: RequiredStr


class QuizQuestion(BaseModel):
    questionNo: Optional[int] = None
    question: RequiredStr
    options: QuizOptions
    correctOption: RequiredStr
    difficulties: Optional[TrimmedStr] = None


class QuizCreate(BaseModel):
    teacherCode: RequiredStr
    quizeName: RequiredStr
    subject: RequiredStr
    dueDate: datetime
    assignedTo: RequiredStr
    questions: Dict[str, QuizQuestion] = {}


class QuizSubmit(BaseModel):
    quizeCode: RequiredStr
    studentCode: RequiredStr
    answers: List[AnswerIn] = Field(min_length=1)


class QuizReview(ReviewFields):
    quizeCode: RequiredStr
