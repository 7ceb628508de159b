from sqlalchemy.orm import Session
from studytrack.models import Unit
from studytrack.schemas import UnitCreate
from studytrack.crud.subject import update_subject_progress
from typing import List

def create_unit(db: Session, unit: UnitCreate) -> Unit:
    """Add a unit to a subject"""
    db_unit = Unit(**unit.model_dump())
    db.add(db_unit)
    db.commit()
    db.refresh(db_unit)
    return db_unit

def get_units(db: Session, subject_id: int) -> List[Unit]:
    """Get units of a subject in display order"""
    return db.query(Unit).filter(
        Unit.subject_id == subject_id
    ).order_by(Unit.sort_order, Unit.id).all()

def delete_unit(db: Session, unit_id: int) -> bool:
    """Delete a unit and its topics, then refresh the subject's progress"""
    db_unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if not db_unit:
        return False
    subject_id = db_unit.subject_id
    db.delete(db_unit)
    db.commit()
    update_subject_progress(db, subject_id)
    return True
