# foodchef/models/schemas.py
"""
Request bodies.

Required fields are typed Optional on purpose: presence is checked by the
managers so the API and direct callers get the same "Missing required field"
messages. Pydantic still rejects malformed values (bad emails, dates, numbers).
"""
import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class ReservationCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: str = ""
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    guests: Optional[int] = None
    message: str = ""


class OrderItemIn(BaseModel):
    food_id: Optional[int] = None
    quantity: Optional[int] = None
    # Accepted but never used: prices are read from the menu at order time
    price: Optional[float] = None


class OrderCreate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    items: List[OrderItemIn] = []
    order_type: Literal["dine_in", "takeaway", "delivery"] = "dine_in"
    delivery_address: str = ""
    special_instructions: str = ""


class FeedbackCreate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: str = ""
    rating: Optional[float] = None
    feedback_type: Optional[str] = None
    subject: str = ""
    message: str = ""
    order_id: Optional[int] = None
    reservation_id: Optional[int] = None
    is_public: bool = True


class FoodReviewCreate(BaseModel):
    food_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    rating: Optional[float] = None
    review: Optional[str] = None


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = ""
    message: str = Field(..., min_length=1)


class StatusUpdate(BaseModel):
    status: str
    notes: str = ""


class CancelRequest(BaseModel):
    reason: str = ""


class ModerationRequest(BaseModel):
    approved: bool
    admin_notes: str = ""
