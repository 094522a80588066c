from sqlalchemy.orm import Session
from studyhub.models import FocusSession
from studyhub.schemas import FocusSessionCreate
from datetime import datetime
from typing import List, Optional

def create_focus_session(db: Session, focus_session: FocusSessionCreate, start_time: Optional[datetime] = None) -> FocusSession:
    """Start a focus session"""
    db_focus = FocusSession(
        **focus_session.model_dump(),
        start_time=start_time or datetime.utcnow()
    )
    db.add(db_focus)
    db.commit()
    db.refresh(db_focus)
    return db_focus

def get_focus_session(db: Session, focus_session_id: int) -> Optional[FocusSession]:
    """Get focus session by ID"""
    return db.query(FocusSession).filter(FocusSession.id == focus_session_id).first()

def get_focus_sessions_by_user(db: Session, user_id: int) -> List[FocusSession]:
    """Get focus sessions for a user, most recent first"""
    return db.query(FocusSession).filter(
        FocusSession.user_id == user_id
    ).order_by(FocusSession.start_time.desc(), FocusSession.id.desc()).all()

def update_focus_session(db: Session, focus_session_id: int, focus_data: dict) -> Optional[FocusSession]:
    """Update a focus session (e.g. set end_time when it finishes)"""
    db_focus = get_focus_session(db, focus_session_id)
    if db_focus:
        for key, value in focus_data.items():
            setattr(db_focus, key, value)
        db.commit()
        db.refresh(db_focus)
    return db_focus
