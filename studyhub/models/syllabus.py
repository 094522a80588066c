from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from studyhub.database import Base

class Syllabus(Base):
    """Uploaded course syllabus with its AI-extracted structure"""
    __tablename__ = "syllabi"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)  # raw extracted text
    course_name = Column(String)
    parsed_content = Column(JSON)  # courseName, instructor, topics, examDates
    created_at = Column(DateTime, default=datetime.utcnow)
    
    user = relationship("User", back_populates="syllabi")
