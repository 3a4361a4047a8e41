"""
MJML Email Templates
All email templates using MJML for responsive, cross-client compatibility
"""

from typing import Optional

from .utils.sanitization import sanitize_string

THEME = {
    "primary": "#ff9900",
    "primary_dark": "#e68a00",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}

APP_NAME = "MentorConnect"


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              You're receiving this because you have an account with {APP_NAME}.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def booking_accepted_template(
    mentee_name: str, mentor_name: str, calendar_link: Optional[str], goal: Optional[str] = None
) -> str:
    """Sent to the mentee when a mentor accepts their session request"""
    # Names are stored as typed; goal is already escaped on write
    mentee_name = sanitize_string(mentee_name)
    mentor_name = sanitize_string(mentor_name)

    goal_section = ""
    if goal:
        goal_section = f"""
    <mj-text color="{THEME['text_muted']}">
      Your goal for the session: <strong>{goal}</strong>
    </mj-text>
    """

    if calendar_link:
        next_step = "Pick a time that works for you using the button below."
    else:
        next_step = f"{mentor_name} will share a scheduling link with you shortly."

    content = f"""
    <mj-text>
      Hi {mentee_name},
    </mj-text>

    <mj-text>
      Good news! <strong>{mentor_name}</strong> has accepted your mentorship session request.
    </mj-text>
    {goal_section}
    <mj-text>
      {next_step}
    </mj-text>
    """

    return get_base_template(
        title="Your session request was accepted",
        preview_text=f"{mentor_name} accepted your session request",
        content_sections=content,
        cta_url=calendar_link,
        cta_label="Schedule your session" if calendar_link else None,
    )


def password_reset_template(reset_link: str) -> str:
    """Password reset MJML template"""
    content = f"""
    <mj-text>
      We received a request to reset your password.
    </mj-text>

    <mj-text color="{THEME['text_muted']}">
      This link expires in one hour. If you didn't request a reset, you can ignore this email.
    </mj-text>
    """

    return get_base_template(
        title="Reset Your Password",
        preview_text=f"Reset your {APP_NAME} password",
        content_sections=content,
        cta_url=reset_link,
        cta_label="Reset Password",
    )
