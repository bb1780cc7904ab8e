# foodchef/services/emails.py
"""HTML bodies for customer and staff notifications."""
from html import escape
from typing import Any, Dict, Iterable

RESTAURANT = "Food Chef Cafe"
SIGNATURE = "<p>Best regards,<br>The Food Chef Team</p>"
FOOTER = (
    "<div style='background: #2C3E50; color: white; padding: 20px; text-align: center;'>"
    "<p>Food Chef Cafe<br>123 Restaurant Street<br>Phone: (555) 123-4567<br>Email: info@foodchef.com</p>"
    "</div>"
)


def _money(value: float) -> str:
    return f"${value:,.2f}"


def _layout(title: str, accent: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset='UTF-8'>"
        f"<title>{escape(title)}</title></head>"
        "<body style='font-family: Arial, sans-serif; line-height: 1.6; color: #333;'>"
        "<div style='max-width: 600px; margin: 0 auto; padding: 20px;'>"
        f"<div style='background: {accent}; color: white; padding: 20px; text-align: center;'>"
        f"<h1>{RESTAURANT}</h1><p>{escape(title)}</p></div>"
        f"<div style='padding: 20px; background: #f9f9f9;'>{body}{SIGNATURE}</div>"
        f"{FOOTER}</div></body></html>"
    )


def _reservation_box(reservation: Dict[str, Any], accent: str) -> str:
    return (
        f"<div style='background: white; padding: 15px; margin: 20px 0; border-left: 4px solid {accent};'>"
        f"<p><strong>Date:</strong> {escape(str(reservation['reservation_date']))}</p>"
        f"<p><strong>Time:</strong> {escape(str(reservation['reservation_time']))}</p>"
        f"<p><strong>Number of Guests:</strong> {reservation['guests']}</p>"
        f"<p><strong>Reservation ID:</strong> #{reservation['id']}</p>"
        "</div>"
    )


def reservation_confirmation(reservation: Dict[str, Any]) -> str:
    body = (
        f"<h2>Hello {escape(reservation['name'])},</h2>"
        "<p>Thank you for your reservation at Food Chef Cafe. Here are your reservation details:</p>"
        f"{_reservation_box(reservation, '#FF6B35')}"
        "<p>We look forward to serving you!</p>"
        "<p>If you need to make any changes to your reservation, please contact us at least 24 hours in advance.</p>"
    )
    return _layout("Reservation Confirmation", "#FF6B35", body)


def reservation_reminder(reservation: Dict[str, Any]) -> str:
    body = (
        f"<h2>Hello {escape(reservation['name'])},</h2>"
        "<p>This is a friendly reminder about your upcoming reservation:</p>"
        f"{_reservation_box(reservation, '#F7931E')}"
        "<p>If you need to cancel or modify your reservation, please contact us as soon as possible.</p>"
    )
    return _layout("Reservation Reminder", "#F7931E", body)


def order_confirmation(order_id: int, customer_name: str, items: Iterable[Dict[str, Any]], total: float) -> str:
    rows = "".join(
        "<tr>"
        f"<td style='padding: 8px;'>{escape(item['food_name'])}</td>"
        f"<td style='padding: 8px;'>{item['quantity']}</td>"
        f"<td style='padding: 8px;'>{_money(item['unit_price'])}</td>"
        f"<td style='padding: 8px;'>{_money(item['total_price'])}</td>"
        "</tr>"
        for item in items
    )
    body = (
        f"<p>Dear {escape(customer_name)},</p>"
        "<p>Thank you for your order! Here are your order details:</p>"
        f"<h3>Order #{order_id}</h3>"
        "<table border='1' style='border-collapse: collapse; width: 100%;'>"
        "<tr style='background: #f0f0f0;'>"
        "<th style='padding: 8px;'>Item</th><th style='padding: 8px;'>Quantity</th>"
        "<th style='padding: 8px;'>Price</th><th style='padding: 8px;'>Total</th></tr>"
        f"{rows}</table>"
        f"<p><strong>Total Amount: {_money(total)}</strong></p>"
        "<p>We'll notify you when your order is ready!</p>"
    )
    return _layout("Order Confirmation", "#FF6B35", body)


def feedback_acknowledgment(feedback: Dict[str, Any]) -> str:
    feedback_type = str(feedback["feedback_type"]).replace("_", " ").capitalize()
    body = (
        f"<p>Dear {escape(feedback['customer_name'])},</p>"
        "<p>Thank you for taking the time to share your feedback with us. "
        "We appreciate your input and will use it to improve our services.</p>"
        "<h3>Your Feedback Summary:</h3>"
        f"<ul><li><strong>Type:</strong> {escape(feedback_type)}</li>"
        f"<li><strong>Rating:</strong> {feedback['rating']}/5</li></ul>"
    )
    if feedback.get("message"):
        body += f"<p><strong>Your Message:</strong><br>{escape(feedback['message'])}</p>"
    body += "<p>We will review your feedback and take appropriate action.</p>"
    return _layout("Feedback Received", "#27AE60", body)


def staff_order_alert(order_id: int, customer_name: str, items: Iterable[Dict[str, Any]], total: float, order_type: str) -> str:
    lines = "".join(f"<li>{item['quantity']} x {escape(item['food_name'])}</li>" for item in items)
    return (
        f"<p><b>NEW ORDER #{order_id}</b> ({escape(order_type)})</p>"
        f"<p>Customer: {escape(customer_name)}</p>"
        f"<ul>{lines}</ul><p>Total: {_money(total)}</p>"
    )


def contact_notification(contact: Dict[str, Any]) -> str:
    return (
        "<h2>New Contact Message</h2>"
        f"<p><strong>Name:</strong> {escape(contact['name'])}</p>"
        f"<p><strong>Email:</strong> {escape(contact['email'])}</p>"
        f"<p><strong>Subject:</strong> {escape(contact.get('subject') or '(none)')}</p>"
        f"<p><strong>Message:</strong><br>{escape(contact['message'])}</p>"
    )
