from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from studytrack.database import Base

class StudyTask(Base):
    """Planner entry scheduled for a specific day"""
    __tablename__ = "study_tasks"
    
    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="SET NULL"))
    title = Column(String, nullable=False)
    scheduled_date = Column(Date, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    carried_over_from = Column(Date)  # original date of a task moved forward
    
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
    
    subject = relationship("Subject")
