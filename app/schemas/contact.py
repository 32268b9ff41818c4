# app/schemas/contact.py
from pydantic import BaseModel
from typing import Optional


class ContactCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
