# foodchef/models/sql_models.py
from datetime import datetime

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, Time,
)
from sqlalchemy.orm import relationship

from foodchef.core.database import Base

RESERVATION_STATUSES = ("pending", "confirmed", "cancelled", "completed")
ORDER_STATUSES = ("pending", "confirmed", "preparing", "ready", "delivered", "cancelled", "completed")
ORDER_TYPES = ("dine_in", "takeaway", "delivery")
FEEDBACK_TYPES = ("general", "food_quality", "service", "ambiance", "delivery", "reservation")
FEEDBACK_STATUSES = ("pending", "reviewed", "resolved")


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    phone = Column(String(20))
    role = Column(String(20), default="customer")  # customer | staff | admin
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class MenuCategory(Base):
    __tablename__ = "menu_categories"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    image = Column(String(255))
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.now)

    foods = relationship("Food", back_populates="category")


class Food(Base):
    __tablename__ = "food"
    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("menu_categories.id"), index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Float, nullable=False, default=0.0)
    image = Column(String(255))
    is_featured = Column(Boolean, default=False)
    is_vegetarian = Column(Boolean, default=False)
    is_spicy = Column(Boolean, default=False)
    preparation_time = Column(Integer, default=15)
    calories = Column(Integer)
    allergens = Column(Text)
    is_active = Column(Boolean, default=True, index=True)
    # Cached from approved reviews only
    avg_rating = Column(Float)
    total_reviews = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    category = relationship("MenuCategory", back_populates="foods")


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (CheckConstraint("guests >= 1", name="ck_reservations_guests"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), default="")
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    guests = Column(Integer, nullable=False, default=1)
    message = Column(Text, default="")
    status = Column(String(20), nullable=False, default="pending", index=True)
    reminder_sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Order(Base):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(20))
    total_amount = Column(Float, nullable=False, default=0.0)
    order_type = Column(String(20), default="dine_in")  # dine_in | takeaway | delivery
    delivery_address = Column(Text, default="")
    special_instructions = Column(Text, default="")
    status = Column(String(20), nullable=False, default="pending", index=True)
    notes = Column(Text, default="")
    created_at = Column(DateTime, default=datetime.now, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),)

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    food_id = Column(Integer, ForeignKey("food.id"), nullable=False, index=True)
    # Name and price as they were when the order was placed
    food_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Float, nullable=False, default=0.0)
    total_price = Column(Float, nullable=False, default=0.0)
    special_requests = Column(Text)
    created_at = Column(DateTime, default=datetime.now)

    order = relationship("Order", back_populates="items")


class FoodReview(Base):
    __tablename__ = "food_reviews"
    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="ck_food_reviews_rating"),)

    id = Column(Integer, primary_key=True, index=True)
    food_id = Column(Integer, ForeignKey("food.id"), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    review = Column(Text)
    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    admin_notes = Column(Text)
    moderated_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.now)


class CustomerFeedback(Base):
    __tablename__ = "customer_feedback"
    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="ck_customer_feedback_rating"),)

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(20), default="")
    rating = Column(Integer, nullable=False)
    feedback_type = Column(String(20), nullable=False, index=True)
    subject = Column(String(255), default="")
    message = Column(Text, default="")
    order_id = Column(Integer, ForeignKey("orders.id"))
    reservation_id = Column(Integer, ForeignKey("reservations.id"))
    is_public = Column(Boolean, default=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, default=datetime.now)


class ContactMessage(Base):
    __tablename__ = "contact_messages"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), default="")
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.now)


class About(Base):
    __tablename__ = "about"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text)
    image = Column(String(255))
    status = Column(Boolean, default=True)


class TeamMember(Base):
    __tablename__ = "team"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    position = Column(String(100))
    bio = Column(Text)
    image = Column(String(255))
    position_order = Column(Integer, default=0)
    status = Column(Boolean, default=True)
