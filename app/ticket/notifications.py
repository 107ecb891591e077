# app/ticket/notifications.py
from app.core.config import get_settings
from app.core.email import send_email
from app.ticket.workflow import Transition


async def notify_transition(ticket_id: int, device_id: str, transition: Transition, actor: str) -> None:
    """Email the configured recipient about a workflow decision.
    Runs as a background task after the response is sent."""
    subject = f"Ticket #{ticket_id} {transition.decision.value} by {transition.level.value}"
    html = (
        f"<p>Ticket <b>#{ticket_id}</b> for device <b>{device_id}</b> was "
        f"{transition.decision.value} by {actor} ({transition.level.value}).</p>"
        f"<p>Status: {transition.source.value} &rarr; <b>{transition.target.value}</b></p>"
    )
    await send_email(get_settings().NOTIFY_EMAIL, subject, html)
