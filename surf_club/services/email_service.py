"""
Email service for the verification and password reset messages.

Both messages share one layout: a greeting, a call-to-action button pointing
at the frontend, the raw link and an expiry note.
"""
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional, Tuple

from surf_club.config import settings

logger = logging.getLogger(__name__)

FOOTER = "Session Surf Club - share your surf sessions"

HTML_TEMPLATE = """
<html>
    <body style="font-family: Arial, sans-serif; padding: 20px;">
        <h2>{heading}</h2>
        <p>{intro}</p>
        <p>
            <a href="{link}"
               style="background-color: {color}; color: white; padding: 10px 20px;
                      text-decoration: none; border-radius: 5px; display: inline-block;">
                {button}
            </a>
        </p>
        <p>Link not working? Paste this address into your browser:</p>
        <p><a href="{link}">{link}</a></p>
        <p>{expiry}</p>
        <p>{ignore}</p>
        <hr>
        <p style="color: #666; font-size: 12px;">{footer}</p>
    </body>
</html>
"""

TEXT_TEMPLATE = """{heading}

{intro}

{link}

{expiry}

{ignore}
"""


def render(heading: str, intro: str, link: str, button: str, color: str, expiry: str, ignore: str) -> Tuple[str, str]:
    """Returns (html, text) bodies for a link email."""
    values = dict(heading=heading, intro=intro, link=link, button=button,
                  color=color, expiry=expiry, ignore=ignore, footer=FOOTER)
    return HTML_TEMPLATE.format(**values), TEXT_TEMPLATE.format(**values)


class EmailService:
    """Service for sending emails via SMTP."""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.timeout = settings.SMTP_TIMEOUT_SECONDS
        self.from_email = settings.EMAIL_FROM

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> bool:
        """
        Send an email via SMTP.

        Without SMTP credentials nothing is sent: the message is logged so the
        links can be followed during development.

        Returns:
            True if email sent successfully, False otherwise
        """
        if not self.smtp_user:
            logger.info("SMTP not configured; email to %s not sent. Subject: %s\n%s",
                        to_email, subject, text_content or html_content)
            return True

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.from_email
        message["To"] = to_email
        if text_content:
            message.attach(MIMEText(text_content, "plain"))
        message.attach(MIMEText(html_content, "html"))

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return False

        logger.info("Email sent successfully to %s", to_email)
        return True

    def send_verification_email(self, to_email: str, token: str, username: str) -> bool:
        """Send the email verification link."""
        html_content, text_content = render(
            heading=f"Welcome to Session Surf Club, {username}!",
            intro="Confirm this address to start posting sessions and chatting with other surfers.",
            link=f"{settings.FRONTEND_URL}/verify-email?token={token}",
            button="Verify Email",
            color="#2563eb",
            expiry=f"The link is valid for {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} hours.",
            ignore="Did not sign up? Nothing to do, the account stays inactive.",
        )
        return self.send_email(
            to_email=to_email,
            subject="Verify your Session Surf Club account",
            html_content=html_content,
            text_content=text_content,
        )

    def send_password_reset_email(self, to_email: str, token: str, username: str) -> bool:
        """Send the password reset link."""
        html_content, text_content = render(
            heading=f"Hi {username},",
            intro="Someone asked to reset the password of your Session Surf Club account.",
            link=f"{settings.FRONTEND_URL}/reset-password?token={token}",
            button="Choose a new password",
            color="#dc2626",
            expiry=f"The link is valid for {settings.PASSWORD_RESET_TOKEN_EXPIRE_HOURS} hour(s).",
            ignore="If that was not you, ignore this email and your password stays the same.",
        )
        return self.send_email(
            to_email=to_email,
            subject="Reset your Session Surf Club password",
            html_content=html_content,
            text_content=text_content,
        )


# Global email service instance
email_service = EmailService()
