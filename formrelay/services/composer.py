"""Email composition for form submissions"""
from html import escape
from typing import List, Tuple

from formrelay.models.notification import NotificationMessage
from formrelay.models.submission import ValidatedSubmission

DETAIL_LABELS = (
    ("service_details", "Service details"),
    ("location", "Location"),
    ("city", "City"),
    ("event_date", "Event date"),
    ("event_time", "Event time"),
    ("coordinator", "Coordinator"),
)

NO_DETAILS = "N/A"


def detail_lines(submission: ValidatedSubmission) -> List[Tuple[str, str]]:
    """Labeled structured detail fields, in display order, blanks skipped"""
    lines = []
    for key, label in DETAIL_LABELS:
        value = getattr(submission, key)
        if value and value.strip():
            lines.append((label, value))
    return lines


def build_subject(submission: ValidatedSubmission) -> str:
    subject = f"New form submission: {submission.service}"
    if submission.brand:
        subject = f"[{submission.brand}] {subject}"
    # Header value, so no line breaks
    return " ".join(subject.split())


def render_text(submission: ValidatedSubmission) -> str:
    """Plain-text body; no escaping needed"""
    lines = [
        "New form submission",
        "",
        f"Name: {submission.name}",
        f"Email: {submission.email}",
        f"Phone: {submission.phone}",
        f"Service: {submission.service}",
        "",
        "Details:",
    ]

    if submission.details:
        lines.append(submission.details)
    else:
        details = detail_lines(submission)
        if details:
            lines.extend(f"- {label}: {value}" for label, value in details)
        else:
            lines.append(NO_DETAILS)

    footer = _footer(submission)
    if footer:
        lines.extend(["", *footer])

    return "\n".join(lines)


def render_html(submission: ValidatedSubmission) -> str:
    """HTML body; every interpolated value goes through html.escape"""
    def field(label: str, value: str) -> str:
        return f"<p><b>{label}:</b> {escape(value, quote=True)}</p>"

    if submission.details:
        details_html = f'<p style="white-space: pre-wrap;">{escape(submission.details, quote=True)}</p>'
    else:
        details = detail_lines(submission)
        if details:
            items = "".join(
                f"<li><b>{label}:</b> {escape(value, quote=True)}</li>"
                for label, value in details
            )
            details_html = f"<ol>{items}</ol>"
        else:
            details_html = f"<p>{NO_DETAILS}</p>"

    footer_html = "".join(
        f'<p style="color: #6b7280; font-size: 12px;">{escape(line, quote=True)}</p>'
        for line in _footer(submission)
    )

    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h3>New form submission</h3>
            {field("Name", submission.name)}
            {field("Email", submission.email)}
            {field("Phone", submission.phone)}
            {field("Service", submission.service)}
            <p><b>Details:</b></p>
            {details_html}
            {footer_html}
        </div>
        """


def _footer(submission: ValidatedSubmission) -> List[str]:
    footer = []
    if submission.brand:
        footer.append(f"Brand: {submission.brand}")
    if submission.user_agent:
        footer.append(f"User agent: {submission.user_agent}")
    return footer


def compose_message(submission: ValidatedSubmission, as_html: bool = True) -> NotificationMessage:
    """
    Build the notification email for a submission

    Args:
        submission: Validated and verified submission
        as_html: Render an HTML body instead of plain text

    Returns:
        NotificationMessage with reply-to set to the submitter
    """
    body = render_html(submission) if as_html else render_text(submission)
    return NotificationMessage(
        subject=build_subject(submission),
        body=body,
        reply_to=submission.email,
        is_html=as_html,
    )
