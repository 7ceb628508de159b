from sqlalchemy.orm import Session
from studytrack.models import Subject, Unit, Topic
from studytrack.schemas import SubjectCreate
from typing import List, Optional

def create_subject(db: Session, subject: SubjectCreate) -> Subject:
    """Create a new subject"""
    db_subject = Subject(**subject.model_dump())
    db.add(db_subject)
    db.commit()
    db.refresh(db_subject)
    return db_subject

def get_subject(db: Session, subject_id: int) -> Optional[Subject]:
    """Get subject by ID"""
    return db.query(Subject).filter(Subject.id == subject_id).first()

def get_subjects(db: Session) -> List[Subject]:
    """Get all subjects, newest first"""
    return db.query(Subject).order_by(Subject.created_at.desc(), Subject.id.desc()).all()

def update_subject(db: Session, subject_id: int, subject_data: dict) -> Optional[Subject]:
    """Update subject fields"""
    db_subject = get_subject(db, subject_id)
    if db_subject:
        for key, value in subject_data.items():
            setattr(db_subject, key, value)
        db.commit()
        db.refresh(db_subject)
    return db_subject

def delete_subject(db: Session, subject_id: int) -> bool:
    """Delete a subject with its units and topics"""
    db_subject = get_subject(db, subject_id)
    if not db_subject:
        return False
    db.delete(db_subject)
    db.commit()
    return True

def update_subject_progress(db: Session, subject_id: int) -> Optional[Subject]:
    """Recompute a subject's progress as the percentage of completed topics"""
    db_subject = get_subject(db, subject_id)
    if not db_subject:
        return None
    
    topics = db.query(Topic).join(Unit).filter(Unit.subject_id == subject_id).all()
    completed = sum(1 for t in topics if t.is_completed)
    db_subject.progress = round(completed / len(topics) * 100) if topics else 0
    
    db.commit()
    db.refresh(db_subject)
    return db_subject
