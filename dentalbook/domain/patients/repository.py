"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def list_patients(db: Session) -> list[Patient]:
        """Get every patient"""
        return db.query(Patient).order_by(Patient.id).all()

    @staticmethod
    def get_patient(db: Session, patient_id: int) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def create_patient(db: Session, commit: bool = True, **patient_data) -> Patient:
        """Create a new patient; with commit=False the row is only flushed"""
        patient = Patient(**patient_data)
        db.add(patient)
        if commit:
            db.commit()
            db.refresh(patient)
        else:
            db.flush()
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        """Update a patient with provided fields and return the stored row"""
        for key, value in updates.items():
            if value is not None and hasattr(patient, key):
                setattr(patient, key, value)

        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def delete_patient(db: Session, patient: Patient) -> None:
        """Hard delete; appointments referencing the patient are left untouched"""
        db.delete(patient)
        db.commit()
