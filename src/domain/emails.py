"""
Email templates for waitlist notifications.

Templates use {{VARIABLE}} placeholders. Values substituted into the
HTML body are escaped; subject and text are plain.
"""

import html
from dataclasses import dataclass

from .ports import EmailMessage

VERIFICATION = "verification"
WELCOME = "welcome"


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    html: str
    text: str


TEMPLATES: dict[str, EmailTemplate] = {
    VERIFICATION: EmailTemplate(
        subject="🌲 Verify Your Email - Join Our Waiting List",
        html="""\
<div style="font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: #ffffff; border-radius: 10px; padding: 40px; text-align: center;">
    <h1 style="color: #2d3748; font-size: 28px;">Welcome to Our Waiting List!</h1>
    <p style="color: #4a5568; font-size: 16px; line-height: 1.6;">
      Thank you for joining our waiting list! Please verify your email address to secure your spot.
    </p>
    <a href="{{VERIFICATION_LINK}}" style="display: inline-block; background: #3182ce; color: white; padding: 15px 30px; text-decoration: none; border-radius: 8px; font-weight: bold;">
      Verify Email Address
    </a>
    <p style="color: #718096; font-size: 12px;">
      If the button doesn't work, copy and paste this link into your browser:<br>
      {{VERIFICATION_LINK}}
    </p>
  </div>
  <p style="text-align: center; color: #718096; font-size: 12px;">
    This email was sent to {{EMAIL_ADDRESS}}.
  </p>
</div>
""",
        text="""\
Welcome to Our Waiting List!

Thank you for joining our waiting list! Please verify your email address to secure your spot.

Verification Link: {{VERIFICATION_LINK}}

Once verified, you'll receive updates about our launch and early access opportunities.

Best regards,
The Waiting List Team

This email was sent to {{EMAIL_ADDRESS}}.
""",
    ),
    WELCOME: EmailTemplate(
        subject="🎉 Welcome! You're Now on Our Waiting List",
        html="""\
<div style="font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: #ffffff; border-radius: 10px; padding: 40px; text-align: center;">
    <h1 style="color: #2d3748; font-size: 28px;">You're All Set!</h1>
    <p style="color: #4a5568; font-size: 16px; line-height: 1.6;">
      Congratulations! Your email has been verified and you're now officially on our waiting list.
    </p>
    <div style="border: 2px solid #68d391; border-radius: 12px; padding: 25px; margin: 30px 0;">
      <h2 style="color: #22543d; margin: 0 0 10px 0; font-size: 20px;">Your Position</h2>
      <p style="color: #2f855a; font-size: 32px; font-weight: bold; margin: 0;">#{{POSITION}}</p>
    </div>
    <p style="color: #718096; font-size: 14px;">Thank you for being part of our journey!</p>
  </div>
  <p style="text-align: center; color: #718096; font-size: 12px;">
    This email was sent to {{EMAIL_ADDRESS}}.
  </p>
</div>
""",
        text="""\
You're All Set!

Congratulations! Your email has been verified and you're now officially on our waiting list.

Your Position: #{{POSITION}}

You'll be among the first to know when we launch.

Best regards,
The Waiting List Team

This email was sent to {{EMAIL_ADDRESS}}.
""",
    ),
}


def render_email_template(template_name: str, variables: dict[str, str]) -> EmailMessage:
    """
    Replace {{NAME}} placeholders in a template.

    Raises:
        KeyError: If template_name is unknown
    """
    template = TEMPLATES[template_name]

    subject = template.subject
    html_body = template.html
    text = template.text

    for key, value in variables.items():
        placeholder = "{{" + key + "}}"
        subject = subject.replace(placeholder, value)
        html_body = html_body.replace(placeholder, html.escape(value))
        text = text.replace(placeholder, value)

    return EmailMessage(subject=subject, html=html_body, text=text)
