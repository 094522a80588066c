from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from studyhub.database import Base

class StudySession(Base):
    """Single scheduled block of a study plan"""
    __tablename__ = "study_sessions"
    
    id = Column(Integer, primary_key=True, index=True)
    study_plan_id = Column(Integer, ForeignKey("study_plans.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text)
    date = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    completed = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    study_plan = relationship("StudyPlan", back_populates="sessions")
