# app/routers/contact.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.contact import ContactCreate
from app.services.contact_service import save_contact

router = APIRouter()


@router.post("/contact", summary="Submit the contact form")
def submit_contact(body: ContactCreate, db: Session = Depends(get_db)):
    save_contact(db, body.name, body.email, body.message)
    return {"ok": True}
