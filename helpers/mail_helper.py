# helpers/mail_helper.py

import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List
from config.settings import settings


def send_email(to_email: str, subject: str, body: str, html: bool = False):
    msg = MIMEMultipart()
    msg["From"] = f"{settings.EMAIL_NAME} <{settings.EMAIL_FROM}>"
    msg["To"] = to_email
    msg["Subject"] = subject

    if html:
        msg.attach(MIMEText(body, "html"))
    else:
        msg.attach(MIMEText(body, "plain"))

    with smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=settings.EMAIL_TIMEOUT) as server:
        server.starttls()
        if settings.EMAIL_USER:
            server.login(settings.EMAIL_USER, settings.EMAIL_PASSWORD or "")
        server.send_message(msg)


def send_review_received_email(
    to_email: str,
    user_name: str,
    title: str,
    image_url: str,
    reviews: List[str],
):
    """
    Sends the reviewee every review collected so far for one submission,
    alongside the first image so they know which one it was.
    """
    subject = f"New review for '{title}'"
    review_lines = "\n".join(f"  - {r}" for r in reviews) or "  (none yet)"
    body = (
        f"Hi {user_name},\n\n"
        f"Someone just reviewed your submission '{title}'.\n"
        f"{image_url}\n\n"
        f"Reviews so far:\n{review_lines}\n\n"
        f"— {settings.EMAIL_NAME} Team"
    )
    send_email(to_email, subject, body)


def send_submission_published_email(to_email: str, user_name: str, title: str):
    subject = f"'{title}' has been published"
    body = (
        f"Hi {user_name},\n\n"
        f"Your submission '{title}' collected enough reviews and is now published.\n\n"
        f"— {settings.EMAIL_NAME} Team"
    )
    send_email(to_email, subject, body)


def send_submission_rejected_email(to_email: str, user_name: str, title: str):
    subject = f"'{title}' was removed"
    body = (
        f"Hi {user_name},\n\n"
        f"Your submission '{title}' was flagged as inappropriate by several reviewers "
        f"and will no longer be shown.\n\n"
        f"— {settings.EMAIL_NAME} Team"
    )
    send_email(to_email, subject, body)
