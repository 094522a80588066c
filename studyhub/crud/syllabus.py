from sqlalchemy.orm import Session
from studyhub.models import Syllabus
from studyhub.schemas import ParsedSyllabusContent, SyllabusCreate
from typing import List, Optional

def create_syllabus(db: Session, syllabus: SyllabusCreate) -> Syllabus:
    """Store an uploaded syllabus and its parsed structure"""
    data = syllabus.model_dump(exclude={"parsed_content"})
    if syllabus.parsed_content is not None:
        data["parsed_content"] = syllabus.parsed_content.to_json()
    db_syllabus = Syllabus(**data)
    db.add(db_syllabus)
    db.commit()
    db.refresh(db_syllabus)
    return db_syllabus

def get_syllabus(db: Session, syllabus_id: int) -> Optional[Syllabus]:
    """Get syllabus by ID"""
    return db.query(Syllabus).filter(Syllabus.id == syllabus_id).first()

def get_syllabi_by_user(db: Session, user_id: int) -> List[Syllabus]:
    """Get all syllabi for a user, newest first"""
    return db.query(Syllabus).filter(
        Syllabus.user_id == user_id
    ).order_by(Syllabus.created_at.desc(), Syllabus.id.desc()).all()

def update_syllabus(db: Session, syllabus_id: int, syllabus_data: dict) -> Optional[Syllabus]:
    """
    Apply corrective updates to a syllabus.

    A corrected parsed_content is validated and stored with camelCase keys,
    the same as on upload. Raises pydantic.ValidationError if it does not fit.
    """
    db_syllabus = get_syllabus(db, syllabus_id)
    if db_syllabus:
        data = dict(syllabus_data)
        if data.get("parsed_content") is not None:
            data["parsed_content"] = ParsedSyllabusContent.model_validate(data["parsed_content"]).to_json()
        for key, value in data.items():
            setattr(db_syllabus, key, value)
        db.commit()
        db.refresh(db_syllabus)
    return db_syllabus

def delete_syllabus(db: Session, syllabus_id: int) -> bool:
    """Delete a syllabus, returning whether it existed"""
    db_syllabus = get_syllabus(db, syllabus_id)
    if not db_syllabus:
        return False
    db.delete(db_syllabus)
    db.commit()
    return True
