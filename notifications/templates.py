"""HTML bodies for transactional emails."""

from markupsafe import escape

VERIFY_SUBJECT = "Verify your email - Our Saladish"
RESET_SUBJECT = "Reset your password - Our Saladish"


def verification_email(name: str, verify_link: str) -> str:
    return f"""
      <h2>Welcome to Our Saladish, {escape(name)}!</h2>
      <p>Thanks for registering! Please confirm your email by clicking below:</p>
      <a href="{escape(verify_link)}" target="_blank" style="color:#00bfa6;font-weight:bold;">Verify Email</a>
      <p>If you didn't request this, please ignore this email.</p>
    """


def reset_email(reset_link: str, ttl_minutes: int) -> str:
    return f"""
      <h3>Reset Your Password</h3>
      <p>Click the link below to reset your password:</p>
      <a href="{escape(reset_link)}" target="_blank" style="color:#00bfa6;font-weight:bold;">Reset Password</a>
      <p>This link will expire in {ttl_minutes} minutes.</p>
    """
