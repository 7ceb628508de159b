from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from studytrack.database import Base

class Topic(Base):
    """Atomic unit of study content with spaced repetition state"""
    __tablename__ = "topics"
    
    id = Column(Integer, primary_key=True, index=True)
    unit_id = Column(Integer, ForeignKey("units.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    notes = Column(Text)
    
    # Spaced repetition fields
    difficulty = Column(String, nullable=False, default="medium")  # easy, medium, hard
    review_count = Column(Integer, nullable=False, default=0)
    required_reviews = Column(Integer, nullable=False, default=3)  # display cache, derived from difficulty
    revision_interval_days = Column(Float)  # optional first-review cadence
    confidence = Column(String)  # low, medium, high
    last_reviewed = Column(DateTime)
    next_review = Column(DateTime)  # NULL = never scheduled, due now
    
    # AI-generated study material
    summary = Column(Text)
    quiz = Column(JSON)  # [{"question", "options", "correct_index", "explanation"}]
    
    created_at = Column(DateTime, default=datetime.now)
    
    unit = relationship("Unit", back_populates="topics")
