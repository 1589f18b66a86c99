"""Email service for transactional notifications.

Supports multiple email providers (SMTP, Resend) configured via EMAIL_PROVIDER env var.
Providers never raise: a failed send is logged and reported as False.
"""

import asyncio
import html
import logging
import smtplib
import ssl
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from app.core.config import settings
from app.services.finance_calculators import goal_progress_percentage

logger = logging.getLogger(__name__)


# =============================================================================
# Email Provider Interface
# =============================================================================

class EmailProvider(ABC):
    """Abstract base class for email providers."""

    @abstractmethod
    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None
    ) -> bool:
        """Send an email. Returns True on success, False on failure."""
        pass


# =============================================================================
# SMTP Provider
# =============================================================================

class SMTPProvider(EmailProvider):
    """Plain SMTP provider; port 465 uses implicit TLS, anything else STARTTLS."""

    def __init__(self):
        self.host = settings.EMAIL_HOST
        self.port = settings.EMAIL_PORT
        self.username = settings.EMAIL_USER
        self.password = settings.EMAIL_PASSWORD
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS

    def _build_message(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: Optional[str]
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((settings.EMAIL_FROM_NAME, settings.EMAIL_FROM_ADDRESS))
        message["To"] = to_email
        message.set_content(text_body or "This email requires an HTML capable client.")
        message.add_alternative(html_body, subtype="html")
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.port == 465:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context) as server:
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(message)
        else:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls(context=context)
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(message)

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None
    ) -> bool:
        message = self._build_message(to_email, subject, html_body, text_body)
        try:
            await asyncio.to_thread(self._send_sync, message)
            logger.info(f"[SMTP] Email sent to {to_email}: {subject}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[SMTP] Error sending to {to_email}: {str(e)}")
            return False


# =============================================================================
# Resend Provider
# =============================================================================

class ResendProvider(EmailProvider):
    """Resend email provider."""

    def __init__(self):
        if not settings.RESEND_API_KEY:
            raise ValueError("RESEND_API_KEY is required when using Resend provider")

        import resend
        resend.api_key = settings.RESEND_API_KEY
        self.resend = resend

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None
    ) -> bool:
        try:
            params = {
                "from": formataddr((settings.EMAIL_FROM_NAME, settings.EMAIL_FROM_ADDRESS)),
                "to": [to_email],
                "subject": subject,
                "html": html_body,
            }

            if text_body:
                params["text"] = text_body

            response = await asyncio.to_thread(self.resend.Emails.send, params)

            email_id = response.get('id', 'unknown') if isinstance(response, dict) else getattr(response, 'id', 'unknown')
            logger.info(f"[Resend] Email sent to {to_email}, ID: {email_id}")
            return True

        except Exception as e:
            logger.error(f"[Resend] Error sending to {to_email}: {str(e)}")
            return False


# =============================================================================
# Provider Factory
# =============================================================================

_provider_instance: Optional[EmailProvider] = None


def get_email_provider() -> EmailProvider:
    """Get the configured email provider (singleton)."""
    global _provider_instance

    if _provider_instance is None:
        provider_name = settings.EMAIL_PROVIDER.lower()

        if provider_name == "smtp":
            _provider_instance = SMTPProvider()
            logger.info(f"Email provider initialized: SMTP ({settings.EMAIL_HOST}:{settings.EMAIL_PORT})")
        elif provider_name == "resend":
            _provider_instance = ResendProvider()
            logger.info("Email provider initialized: Resend")
        else:
            raise ValueError(f"Unknown email provider: {provider_name}. Use 'smtp' or 'resend'.")

    return _provider_instance


# =============================================================================
# Email Templates
# =============================================================================

def _money(amount: float | None, currency: str) -> str:
    return f"{html.escape(currency)} {float(amount or 0):,.2f}"


def _layout(title: str, content: str) -> str:
    """Wrap template content in the shared HTML shell."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{
                font-family: Arial, sans-serif;
                line-height: 1.6;
                color: #333;
                max-width: 600px;
                margin: 0 auto;
                padding: 20px;
            }}
            .container {{
                background-color: #f9f9f9;
                border-radius: 10px;
                padding: 30px;
                box-shadow: 0 2px 5px rgba(0,0,0,0.1);
            }}
            .header {{
                text-align: center;
                color: #2c3e50;
                margin-bottom: 30px;
            }}
            .stats td {{
                padding: 6px 12px;
            }}
            .progress {{
                background-color: #e5e7eb;
                border-radius: 6px;
                height: 14px;
            }}
            .progress-bar {{
                background-color: #22c55e;
                border-radius: 6px;
                height: 14px;
            }}
            .button {{
                display: inline-block;
                background-color: #3498db;
                color: #fff;
                padding: 10px 18px;
                border-radius: 6px;
                text-decoration: none;
            }}
            .footer {{
                text-align: center;
                color: #7f8c8d;
                font-size: 12px;
                margin-top: 30px;
            }}
        </style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>{title}</h1>
            </div>
            {content}
            <p>Best,<br>The {html.escape(settings.EMAIL_FROM_NAME)} Team</p>
            <div class="footer">
                <p>This is an automated message, please do not reply.</p>
            </div>
        </div>
    </body>
    </html>
    """


def _text_footer() -> str:
    return f"\n---\nThis is an automated message, please do not reply.\n{settings.EMAIL_FROM_NAME}\n"


def build_welcome_email(name: str) -> tuple[str, str, str]:
    """Return (subject, html, text) for the post-registration welcome."""
    app_name = settings.EMAIL_FROM_NAME
    subject = f"Welcome to {app_name}!"
    content = f"""
            <p>Hello {html.escape(name)},</p>
            <p>Welcome to {html.escape(app_name)}! We're excited to help you manage your finances.</p>
            <p>To get started, you can:</p>
            <ul>
                <li>Add your bank accounts</li>
                <li>Upload a bank statement for automatic categorization</li>
                <li>Set savings goals and track progress</li>
            </ul>
            <p><a class="button" href="{settings.FRONTEND_URL}">Open your dashboard</a></p>
    """
    text = (
        f"Hello {name},\n\nWelcome to {app_name}! Add your bank accounts, upload a statement "
        f"and set savings goals to get started.\n\n{settings.FRONTEND_URL}\n" + _text_footer()
    )
    return subject, _layout(subject, content), text


def build_weekly_report_email(
    name: str,
    income: float,
    expenses: float,
    savings: float,
    currency: str = "INR",
    insights: Optional[list[dict]] = None
) -> tuple[str, str, str]:
    """Return (subject, html, text) for the weekly income/expense summary."""
    subject = "Your Weekly Financial Report"
    insight_items = "".join(
        f"<li><strong>{html.escape(i.get('title', ''))}</strong>: {html.escape(i.get('description', ''))}</li>"
        for i in (insights or [])[:3]
    )
    insight_block = f"<h2>Insights</h2><ul>{insight_items}</ul>" if insight_items else ""
    content = f"""
            <p>Hello {html.escape(name)},</p>
            <p>Here's your financial summary for the past week:</p>
            <table class="stats">
                <tr><td>Income</td><td>{_money(income, currency)}</td></tr>
                <tr><td>Expenses</td><td>{_money(expenses, currency)}</td></tr>
                <tr><td>Savings</td><td>{_money(savings, currency)}</td></tr>
            </table>
            {insight_block}
    """
    text = (
        f"Hello {name},\n\nYour weekly report:\n"
        f"Income: {currency} {income:,.2f}\nExpenses: {currency} {expenses:,.2f}\n"
        f"Savings: {currency} {savings:,.2f}\n" + _text_footer()
    )
    return subject, _layout(subject, content), text


def build_upload_reminder_email(name: str) -> tuple[str, str, str]:
    subject = "Reminder: Upload Your Bank Statement"
    content = f"""
            <p>Hello {html.escape(name)},</p>
            <p>This is a friendly reminder to upload your latest bank statement.
            Regular uploads keep your insights and recommendations accurate.</p>
            <p><a class="button" href="{settings.FRONTEND_URL}/statements">Upload statement</a></p>
    """
    text = f"Hello {name},\n\nPlease upload your latest bank statement.\n" + _text_footer()
    return subject, _layout("Upload Reminder", content), text


def build_analysis_complete_email(
    name: str,
    transaction_count: int,
    insights: list[dict]
) -> tuple[str, str, str]:
    """Return (subject, html, text) sent after a statement upload is processed."""
    subject = "Bank Statement Analysis Complete"
    highlights = "".join(
        f"<li><strong>{html.escape(i.get('title', ''))}</strong>: {html.escape(i.get('description', ''))}</li>"
        for i in insights[:3]
    )
    content = f"""
            <p>Hello {html.escape(name)},</p>
            <p>We've analyzed your recently uploaded bank statement: {transaction_count} transactions
            were imported and {len(insights)} insights generated.</p>
            {f"<h2>Highlights</h2><ul>{highlights}</ul>" if highlights else ""}
    """
    text = (
        f"Hello {name},\n\nYour statement was analyzed: {transaction_count} transactions, "
        f"{len(insights)} insights.\n" + _text_footer()
    )
    return subject, _layout("Analysis Complete", content), text


def build_goal_progress_email(name: str, goal: dict, currency: str = "INR") -> tuple[str, str, str]:
    progress = goal_progress_percentage(goal.get("current_amount"), goal.get("target_amount"))
    goal_name = goal.get("name", "")
    subject = f"Goal Progress Update: {goal_name}"
    content = f"""
            <p>Hello {html.escape(name)},</p>
            <p>Here's an update on your financial goal "{html.escape(goal_name)}":</p>
            <div class="progress"><div class="progress-bar" style="width: {progress:.0f}%"></div></div>
            <p>{_money(goal.get("current_amount"), currency)} of {_money(goal.get("target_amount"), currency)}
            saved ({progress:.1f}%).</p>
            <p>Keep up the good work!</p>
    """
    text = (
        f"Hello {name},\n\nGoal \"{goal_name}\" is {progress:.1f}% complete.\n" + _text_footer()
    )
    return subject, _layout("Goal Progress Update", content), text


def build_test_email() -> tuple[str, str, str]:
    subject = f"Test Email from {settings.EMAIL_FROM_NAME}"
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    content = f"""
            <p>This is a test email from {html.escape(settings.EMAIL_FROM_NAME)}.</p>
            <p>If you're receiving this, your {html.escape(settings.EMAIL_PROVIDER)} configuration is working.</p>
            <p>Current time: {now}</p>
    """
    text = f"This is a test email sent at {now}.\n" + _text_footer()
    return subject, _layout("Test Email", content), text


# =============================================================================
# Public API
# =============================================================================

async def send_email(
    to_email: str,
    subject: str,
    html_body: str,
    text_body: Optional[str] = None
) -> bool:
    """
    Send a generic email.

    Args:
        to_email: Recipient email address
        subject: Email subject
        html_body: HTML content of the email
        text_body: Plain text content (optional)

    Returns:
        True if email sent successfully, False otherwise
    """
    if not settings.EMAIL_ENABLED:
        logger.info(f"Email disabled, skipping '{subject}' to {to_email}")
        return False

    try:
        provider = get_email_provider()
    except ValueError as e:
        logger.error(f"Email provider unavailable, cannot send '{subject}': {e}")
        return False
    return await provider.send(to_email, subject, html_body, text_body)


async def send_welcome_email(user: dict) -> bool:
    subject, html_body, text_body = build_welcome_email(user["name"])
    return await send_email(user["email"], subject, html_body, text_body)


async def send_weekly_report_email(
    user: dict,
    income: float,
    expenses: float,
    savings: float,
    insights: Optional[list[dict]] = None
) -> bool:
    subject, html_body, text_body = build_weekly_report_email(
        user["name"], income, expenses, savings, user.get("currency") or "INR", insights
    )
    return await send_email(user["email"], subject, html_body, text_body)


async def send_upload_reminder_email(user: dict) -> bool:
    subject, html_body, text_body = build_upload_reminder_email(user["name"])
    return await send_email(user["email"], subject, html_body, text_body)


async def send_analysis_complete_email(user: dict, transaction_count: int, insights: list[dict]) -> bool:
    subject, html_body, text_body = build_analysis_complete_email(
        user["name"], transaction_count, insights
    )
    return await send_email(user["email"], subject, html_body, text_body)


async def send_goal_progress_email(user: dict, goal: dict) -> bool:
    subject, html_body, text_body = build_goal_progress_email(
        user["name"], goal, user.get("currency") or "INR"
    )
    return await send_email(user["email"], subject, html_body, text_body)


async def send_test_email(to_email: str) -> bool:
    subject, html_body, text_body = build_test_email()
    return await send_email(to_email, subject, html_body, text_body)
