from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional
from datetime import date, datetime

Difficulty = Literal["easy", "medium", "hard"]
ConfidenceLevel = Literal["low", "medium", "high"]

# Palette offered to the syllabus parser for subject colors
SUBJECT_COLORS = ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6", "#EC4899", "#06B6D4", "#F97316"]

class SubjectCreate(BaseModel):
    """Schema for creating a subject"""
    name: str
    color: str = SUBJECT_COLORS[0]

class UnitCreate(BaseModel):
    """Schema for creating a unit within a subject"""
    subject_id: int
    name: str
    sort_order: int = 0

class TopicCreate(BaseModel):
    """Schema for adding a topic to a unit"""
    unit_id: int
    name: str
    difficulty: Difficulty = "medium"
    revision_interval_days: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None
    sort_order: int = 0

class StudyTaskCreate(BaseModel):
    """Schema for scheduling a planner task"""
    title: str
    scheduled_date: date
    subject_id: Optional[int] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Task title cannot be empty")
        return value

class QuizQuestion(BaseModel):
    """Single multiple-choice question attached to a topic"""
    question: str = Field(description="Question text")
    options: List[str] = Field(description="Four answer options")
    correct_index: int = Field(description="Index of the correct option (0-3)")
    explanation: str = Field(default="", description="Why the correct option is right")

class TopicContent(BaseModel):
    """AI-generated study notes and quiz for a topic"""
    summary: str = Field(description="Concise 2-3 paragraph summary of key concepts")
    quiz: List[QuizQuestion] = Field(description="5 quiz questions covering the topic")

class TestQuestion(QuizQuestion):
    difficulty: Difficulty = Field(default="medium", description="easy, medium or hard")

class PracticeTest(BaseModel):
    """AI-generated multiple-choice practice test"""
    questions: List[TestQuestion] = Field(description="Multiple-choice questions")

class ParsedTopic(BaseModel):
    name: str
    difficulty: Difficulty = "medium"
    revision_interval_days: Optional[float] = Field(default=None, gt=0)

class ParsedUnit(BaseModel):
    name: str = Field(description="Unit name, e.g. 'Unit I: The Theory Of Automata'")
    topics: List[ParsedTopic] = Field(description="Topic names listed under the unit")

    @field_validator("topics", mode="before")
    @classmethod
    def _topics_from_names(cls, value):
        # The AI parser returns bare topic names
        return [{"name": item} if isinstance(item, str) else item for item in value]

class ParsedSubject(BaseModel):
    name: str = Field(description="Subject name")
    color: str = Field(default=SUBJECT_COLORS[0], description="Hex color for the subject")
    units: List[ParsedUnit] = Field(description="Units within the subject")

class ParsedSyllabus(BaseModel):
    """Subject -> Unit -> Topic tree extracted from a syllabus"""
    subjects: List[ParsedSubject] = Field(description="Subjects found in the syllabus")

class ChatMessageIn(BaseModel):
    """Role-tagged message sent to the AI tutor"""
    role: Literal["user", "assistant"]
    content: str = ""
    image_url: Optional[str] = None

class ReviewResult(BaseModel):
    """Outcome of a completed review session"""
    topic_id: int
    difficulty: Difficulty
    review_count: int
    required_reviews: int
    next_review: datetime
    mastered: bool
    newly_mastered: bool

class DailyActivity(BaseModel):
    day: str
    topics: int
    reviews: int

class SubjectProgress(BaseModel):
    name: str
    color: str
    progress: int

class DashboardSummary(BaseModel):
    """Figures shown on the student dashboard"""
    total_subjects: int
    total_topics: int
    completed_topics: int
    overall_progress: int
    due_today: int
    urgent: int
    mastered: int
    show_revision_reminder: bool
    weekly_activity: List[DailyActivity]

class ParentReport(BaseModel):
    """Read-only weekly summary for parents"""
    topics_completed_this_week: int
    reviews_this_week: int
    study_streak: int
    overall_progress: int
    completed_topics: int
    total_topics: int
    due_today: int
    urgent: int
    subjects: List[SubjectProgress]
    tests_completed: int
    average_test_score: int
    confidence: dict
    weekly_activity: List[DailyActivity]
    headline: str
