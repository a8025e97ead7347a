"""Keyword heuristics for spotting job-application emails."""

import re
from dataclasses import dataclass

from jobtracker.models.application import ApplicationStatus

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_POSITION = "Unknown Position"

APPLICATION_KEYWORDS = [
    "thank you for applying",
    "application received",
    "we have received your application",
    "your application for",
    "application confirmation",
    "thank you for your interest",
    "we received your application",
    "application submitted successfully",
    "your resume has been received",
    "thank you for submitting",
    "working student",
    "werkstudent",
    # German
    "vielen dank für ihre bewerbung",
    "herzlichen dank für ihre bewerbung",
    "wir werden uns schnellstmöglich wieder mit ihnen kontakt aufnehmen",
    "wir werden uns so schnell wie möglich bei ihnen melden",
    "ihre bewerbung für die position",
    "bewerbung eingegangen",
]

REJECTION_KEYWORDS = [
    "unfortunately",
    "we regret to inform",
    "not selected",
    "decided to move forward with other candidates",
    "will not be moving forward",
    "thank you for your interest, however",
    "we have decided not to proceed",
    "position has been filled",
    # German
    "leider mitteilen",
    "andere kandidat",
    "nicht weiter berücksichtigen",
    "absage",
    "unser feedback",
]

INTERVIEW_KEYWORDS = [
    "interview",
    "would like to schedule",
    "next step in the process",
    "phone screen",
    "video call",
    "meet with our team",
    "discuss your application further",
]

_SENDER_ADDRESS_RE = re.compile(r"<(.+)>")
_POSITION_RE = re.compile(r"for\s+(.+?)\s+(position|role)", re.IGNORECASE)


@dataclass
class EmailClassification:
    """Outcome of classifying one email."""

    is_application: bool
    status: ApplicationStatus | None = None
    company: str = UNKNOWN_COMPANY
    position: str = UNKNOWN_POSITION


def _contains_any(text: str, keywords: list[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def infer_status(text: str) -> ApplicationStatus:
    """Pick a status for lower-cased email text; rejection wins over interview."""
    if _contains_any(text, REJECTION_KEYWORDS):
        return ApplicationStatus.REJECTED
    if _contains_any(text, INTERVIEW_KEYWORDS):
        return ApplicationStatus.INTERVIEW
    return ApplicationStatus.APPLIED


def extract_company(sender: str) -> str:
    """Guess the company from the sender's email domain.

    ``"Jane <jane@acme.io>"`` becomes ``"Acme"``.
    """
    match = _SENDER_ADDRESS_RE.search(sender or "")
    if not match:
        return UNKNOWN_COMPANY

    _, sep, domain = match.group(1).partition("@")
    company = domain.split(".")[0].strip()
    if not sep or not company:
        return UNKNOWN_COMPANY
    return company[0].upper() + company[1:]


def extract_position(subject: str) -> str:
    """Take the words between "for" and "position"/"role" in the subject."""
    match = _POSITION_RE.search(subject or "")
    if match:
        return match.group(1)
    return UNKNOWN_POSITION


def classify(subject: str, body: str, sender: str = "") -> EmailClassification:
    """Classify an email by literal phrase matching.

    This is a best-effort heuristic: there is no scoring, negation handling
    or stemming, so false positives and negatives are expected.
    """
    text = f"{subject} {body}".lower()

    if not _contains_any(text, APPLICATION_KEYWORDS):
        return EmailClassification(is_application=False)

    return EmailClassification(
        is_application=True,
        status=infer_status(text),
        company=extract_company(sender),
        position=extract_position(subject),
    )
