from sqlalchemy.orm import Session
from studyhub.models import Summary
from studyhub.schemas import SummaryCreate
from typing import List, Optional

def create_summary(db: Session, summary: SummaryCreate) -> Summary:
    """Store a generated summary"""
    db_summary = Summary(**summary.model_dump())
    db.add(db_summary)
    db.commit()
    db.refresh(db_summary)
    return db_summary

def get_summary(db: Session, summary_id: int) -> Optional[Summary]:
    """Get summary by ID"""
    return db.query(Summary).filter(Summary.id == summary_id).first()

def get_summaries_by_user(db: Session, user_id: int) -> List[Summary]:
    """Get all summaries for a user, newest first"""
    return db.query(Summary).filter(
        Summary.user_id == user_id
    ).order_by(Summary.created_at.desc(), Summary.id.desc()).all()

def delete_summary(db: Session, summary_id: int) -> bool:
    """Delete a summary, returning whether it existed"""
    db_summary = get_summary(db, summary_id)
    if not db_summary:
        return False
    db.delete(db_summary)
    db.commit()
    return True
