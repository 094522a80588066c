from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from enum import Enum

class UserCreate(BaseModel):
    """Schema for creating a user"""
    username: str = Field(min_length=1)

# ===================================================================
# SYLLABUS
# ===================================================================

class Topic(BaseModel):
    """Topic listed in a syllabus"""
    name: str
    description: Optional[str] = ""

class ExamDate(BaseModel):
    """Exam listed in a syllabus"""
    name: str
    date: str = Field(description="Date in YYYY-MM-DD format")

class ParsedSyllabusContent(BaseModel):
    """Structured syllabus extracted by the LLM (camelCase on the wire)"""
    model_config = ConfigDict(populate_by_name=True)

    course_name: str = Field(default="Untitled Course", alias="courseName")
    instructor: str = "Unknown"
    topics: List[Topic] = Field(default_factory=list)
    exam_dates: List[ExamDate] = Field(default_factory=list, alias="examDates")

    def to_json(self) -> dict:
        """Dump with the camelCase keys used for storage"""
        return self.model_dump(by_alias=True)

class SyllabusCreate(BaseModel):
    """Schema for storing an uploaded syllabus"""
    user_id: int
    title: str
    content: str
    course_name: Optional[str] = None
    parsed_content: Optional[ParsedSyllabusContent] = None

# ===================================================================
# STUDY PLANS
# ===================================================================

class StudyPreferences(BaseModel):
    """User preferences for study plan generation"""
    start_date: date
    end_date: date
    hours_per_day: Optional[float] = Field(default=None, gt=0)
    preferred_study_times: Optional[List[str]] = None
    excluded_days: Optional[List[str]] = None

class GeneratedSession(BaseModel):
    """Session as returned by the plan generator"""
    title: str
    description: Optional[str] = ""
    date: date
    duration: int = Field(gt=0, description="Duration in minutes")

    @field_validator("date", mode="before")
    @classmethod
    def drop_time_of_day(cls, value):
        # Models sometimes answer with a full timestamp; only the day is kept
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
        return value

class GeneratedStudyPlan(BaseModel):
    """Plan as returned by the plan generator, before persistence"""
    title: str
    description: Optional[str] = ""
    sessions: List[GeneratedSession] = Field(default_factory=list)

class StudyPlanCreate(BaseModel):
    """Schema for creating a study plan header"""
    user_id: int
    title: str
    description: Optional[str] = None
    start_date: date
    end_date: date

class StudySessionCreate(BaseModel):
    """Schema for creating a study session"""
    study_plan_id: int
    title: str
    description: Optional[str] = None
    date: date
    duration: int = Field(gt=0)
    completed: bool = False

# ===================================================================
# SUMMARIES, TASKS, FOCUS, CHAT
# ===================================================================

class SummaryFormat(str, Enum):
    bullet_points = "bullet_points"
    paragraphs = "paragraphs"

class SummaryCreate(BaseModel):
    """Schema for storing a summary"""
    user_id: int
    title: str
    original_content: str
    summary: str

class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class TaskCategory(str, Enum):
    study = "study"
    assignment = "assignment"
    personal = "personal"

class TaskCreate(BaseModel):
    """Schema for creating a task"""
    user_id: int
    title: str = Field(min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: TaskPriority = TaskPriority.medium
    category: TaskCategory = TaskCategory.study
    completed: bool = False

class FocusSessionCreate(BaseModel):
    """Schema for starting a focus session"""
    user_id: int
    duration: int = Field(gt=0, description="Planned duration in minutes")
    task_id: Optional[int] = None

class ChatMessageCreate(BaseModel):
    """Schema for storing a chat message"""
    user_id: int
    content: str = Field(min_length=1)
    is_user_message: bool

class ChatTurn(BaseModel):
    """Prior conversation turn passed to the tutor"""
    content: str
    is_user_message: bool
