"""
Email notifications for report runs.
"""

from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.email_address import EmailAddress
from msgraph.generated.models.item_body import ItemBody
from msgraph.generated.models.message import Message
from msgraph.generated.models.recipient import Recipient
from msgraph.generated.users.item.send_mail.send_mail_post_request_body import (
    SendMailPostRequestBody,
)

from core.config import ERROR_EMAIL, FROM_EMAIL, TO_EMAIL
from core.graph_client import create_graph_client
from services.reports import format_date_for_subject, format_report_summary
from services.weekly_report import ReportRun


def build_report_subject(run: ReportRun) -> str:
    return f"Weekly Time Report {format_date_for_subject(run.window.start)}"


def _build_message(subject: str, body_text: str, to_address: str) -> SendMailPostRequestBody:
    message = Message(
        subject=subject,
        body=ItemBody(content_type=BodyType.Text, content=body_text),
        to_recipients=[Recipient(email_address=EmailAddress(address=to_address))],
    )
    return SendMailPostRequestBody(message=message, save_to_sent_items=True)


async def send_report_email(run: ReportRun):
    """Send the week's summary."""
    if not (FROM_EMAIL and TO_EMAIL):
        print("FROM_EMAIL / TO_EMAIL not set, skipping report email")
        return

    graph = create_graph_client()
    body_text = format_report_summary(run.window, run.rows)
    request_body = _build_message(build_report_subject(run), body_text, TO_EMAIL)

    await graph.users.by_user_id(FROM_EMAIL).send_mail.post(request_body)
    print(f"Sent report email to {TO_EMAIL}")


async def send_error_email(message: str):
    """Send error notification email."""
    if not (FROM_EMAIL and ERROR_EMAIL):
        print("FROM_EMAIL / ERROR_EMAIL not set, skipping error email")
        return

    body_text = f"An error occurred while generating the weekly time report:\n\n{message}"
    request_body = _build_message("Weekly Time Report - Error", body_text, ERROR_EMAIL)

    try:
        graph = create_graph_client()
        await graph.users.by_user_id(FROM_EMAIL).send_mail.post(request_body)
        print(f"Sent error email to {ERROR_EMAIL}")
    except Exception as e:
        print(f"Failed to send error email: {e}")
