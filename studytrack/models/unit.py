from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from studytrack.database import Base

class Unit(Base):
    """Chapter/unit grouping topics within a subject"""
    __tablename__ = "units"
    
    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now)
    
    subject = relationship("Subject", back_populates="units")
    topics = relationship(
        "Topic",
        back_populates="unit",
        cascade="all, delete-orphan",
        order_by="Topic.sort_order"
    )
