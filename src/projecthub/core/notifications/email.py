"""Email content for project status changes.

Delivery is handled by an external mailer that consumes the ``mail`` table;
this module only renders subjects and HTML bodies.
"""

import html
from datetime import datetime

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import ProjectStatus

# Shared email styles
_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_QUOTE_STYLE = (
    "background-color: #f5f5f5; padding: 15px; border-left: 4px solid #2196f3; margin: 20px 0;"
)
_MUTED_STYLE = "color: #666; font-size: 14px;"
_LINK_STYLE = "color: #2563eb; word-break: break-all;"

STATUS_COLORS: dict[ProjectStatus, str] = {
    ProjectStatus.APPROVED: "#4caf50",
    ProjectStatus.REJECTED: "#f44336",
    ProjectStatus.REVISION_REQUIRED: "#ff9800",
    ProjectStatus.UNDER_REVIEW: "#2196f3",
    ProjectStatus.PENDING: "#9e9e9e",
}

STATUS_MESSAGES: dict[ProjectStatus, str] = {
    ProjectStatus.APPROVED: "Congratulations! Your project has been approved.",
    ProjectStatus.REJECTED: "Unfortunately, your project has been rejected.",
    ProjectStatus.REVISION_REQUIRED: "Your project requires some revisions before approval.",
    ProjectStatus.UNDER_REVIEW: "Your project is currently under review.",
    ProjectStatus.PENDING: "Your project status has been reset to pending.",
}


def status_label(status: ProjectStatus | str) -> str:
    """Human-readable status: ``revision-required`` -> ``Revision Required``."""
    value = status.value if isinstance(status, ProjectStatus) else str(status)
    return value.replace("-", " ").title()


def status_change_subject(project_title: str) -> str:
    return f"Project Status Update: {project_title}"


def render_status_change_email(
    project_title: str,
    new_status: ProjectStatus,
    comment: str,
    reviewer_name: str,
    reviewed_at: datetime | None = None,
    project_url: str | None = None,
) -> str:
    """Generate HTML content for a project status change email.

    Every caller-supplied value is HTML-escaped before interpolation.
    """
    color = STATUS_COLORS[new_status]
    message = STATUS_MESSAGES[new_status]
    safe_title = html.escape(project_title)
    safe_reviewer = html.escape(reviewer_name)
    date = (reviewed_at or utc_now()).strftime("%Y-%m-%d")

    comment_block = ""
    if comment:
        safe_comment = html.escape(comment).replace("\n", "<br>")
        comment_block = f"""
    <div style="{_QUOTE_STYLE}">
        <strong>Reviewer Comments:</strong>
        <p style="margin: 8px 0 0 0;">{safe_comment}</p>
    </div>"""

    link_block = ""
    if project_url:
        safe_url = html.escape(project_url, quote=True)
        link_block = f"""
    <p><a href="{safe_url}" style="{_LINK_STYLE}">View your project</a></p>"""

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h2 style="color: {color}; margin-bottom: 24px;">Project Status Update</h2>
    <p><strong>Project:</strong> {safe_title}</p>
    <p><strong>New Status:</strong>
        <span style="color: {color}; font-weight: bold;">{status_label(new_status)}</span>
    </p>
    <p>{message}</p>{comment_block}{link_block}
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        Reviewed by: {safe_reviewer}<br>
        Date: {date}
    </p>
</body>
</html>"""
