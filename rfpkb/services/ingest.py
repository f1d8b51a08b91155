"""
Document ingest

Turns the raw text of an uploaded document into a draft record. This is a
heuristic stand-in for a real extraction model: labeled lines are read with
regular expressions, and anything missing falls back to fixed text.

The only contract is that build_draft returns syntactically valid fields
for any input string and never raises.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rfpkb.database import BIGINT_MAX
from rfpkb.models import RecordStatus
from rfpkb.utils.logging import get_logger

logger = get_logger(__name__)

SHORT_BIO_CHARS = 200
MEDIUM_BIO_CHARS = 500
LONG_BIO_CHARS = 1000
MAX_SPECIALTIES = 5
MAX_SERVICES = 5
MAX_LINE_CHARS = 255
DATE_CHARS = 32
TYPE_CHARS = 100

DEFAULT_NAME = "Unknown Name"
DEFAULT_TITLE = "Professional"
DEFAULT_BIO = "Professional with extensive experience in their field."
DEFAULT_EDUCATION = "Education details not specified"

TECH_TERMS = [
    "JavaScript", "Python", "React", "Node.js", "AWS", "Docker", "Kubernetes",
    "Machine Learning", "Data Science", "Frontend", "Backend", "Full Stack",
    "DevOps", "Cloud Computing", "Database Design", "API Development",
]

SERVICE_TERMS = [
    "Civil Engineering", "Structural Engineering", "Transportation", "Traffic Engineering",
    "Environmental", "Geotechnical", "Surveying", "Construction Management",
    "Inspection", "Water Resources", "Architecture", "Planning", "Program Management",
    "Software Development", "Consulting",
]

TITLE_KEYWORDS = ("engineer", "manager", "director", "specialist")

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_DEGREE = re.compile(r"(Bachelor|Master|PhD|Associate|Certificate)[^.]*", re.IGNORECASE)
_YEARS = re.compile(r"(\d{1,2})\+?\s+years", re.IGNORECASE)
_PROJECT_HINT = re.compile(r"^\s*(?:Client|Project(?: Name)?)\s*:", re.IGNORECASE | re.MULTILINE)
_COMPANY_HINT = re.compile(r"^\s*Company(?: Name)?\s*:", re.IGNORECASE | re.MULTILINE)
_CERT_HINT = re.compile(r"\b(?:DBE|MBE)\b")


@dataclass
class Draft:
    """A record draft: which collection it belongs in and its fields."""
    collection: str
    fields: Dict[str, Any] = field(default_factory=dict)


def decode_document(data: bytes) -> str:
    """Decode uploaded bytes as text. Undecodable bytes are replaced, not fatal."""
    return data.decode("utf-8", errors="replace")


def _labeled(text: str, *labels: str) -> Optional[str]:
    """Value of the first "<Label>: value" line for any of labels."""
    alternatives = "|".join(re.escape(label) for label in sorted(labels, key=len, reverse=True))
    match = re.search(rf"\b(?:{alternatives}):\s*([^\n\r]+)", text, re.IGNORECASE)
    if match:
        value = match.group(1).strip()[:MAX_LINE_CHARS]
        return value or None
    return None


def _clip(value: Optional[str], limit: int) -> Optional[str]:
    return value[:limit].strip() if value else value


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in re.split(r"[,;]", value) if item.strip()]


def _keywords(text: str, terms: List[str], cap: int) -> List[str]:
    lowered = text.lower()
    return [term for term in terms if term.lower() in lowered][:cap]


def _first_short_line(text: str) -> Optional[str]:
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if lines and len(lines[0]) < 50 and "@" not in lines[0]:
        return lines[0]
    return None


def _sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > 20]


def extract_name(text: str) -> str:
    return _labeled(text, "Name", "Full Name") or _first_short_line(text) or DEFAULT_NAME


def extract_title(text: str) -> str:
    title = _labeled(text, "Title", "Position", "Job")
    if title:
        return title

    for line in text.split("\n"):
        lowered = line.lower()
        if any(keyword in lowered for keyword in TITLE_KEYWORDS):
            return line.strip()[:MAX_LINE_CHARS]

    return DEFAULT_TITLE


def generate_short_bio(text: str) -> str:
    sentences = _sentences(text)
    if sentences:
        return sentences[0].strip()[:SHORT_BIO_CHARS] + "..."
    return DEFAULT_BIO


def generate_medium_bio(text: str) -> str:
    sentences = _sentences(text)
    if len(sentences) >= 2:
        return ". ".join(sentences[:2]).strip()[:MEDIUM_BIO_CHARS] + "..."
    return generate_short_bio(text)


def generate_long_bio(text: str) -> str:
    clean = re.sub(r"\s+", " ", text).strip()
    return clean[:LONG_BIO_CHARS] + ("..." if len(clean) > LONG_BIO_CHARS else "")


def extract_specialties(text: str) -> List[str]:
    return _keywords(text, TECH_TERMS, MAX_SPECIALTIES)


def extract_education(text: str) -> str:
    education = _labeled(text, "Education", "Degree", "University")
    if education:
        return education

    degree = _DEGREE.search(text)
    if degree:
        return degree.group(0).strip()

    return DEFAULT_EDUCATION


def extract_years(text: str) -> Optional[int]:
    match = _YEARS.search(text)
    return int(match.group(1)) if match else None


def extract_services(text: str) -> List[str]:
    return _split_list(_labeled(text, "Services")) or _keywords(text, SERVICE_TERMS, MAX_SERVICES)


def extract_value(text: str) -> Optional[int]:
    """Integer amount from a "Value: $1,250,000" style line."""
    raw = _labeled(text, "Value", "Contract Value", "Fee")
    if not raw:
        return None
    digits = re.match(r"\$?\s*([\d,]+)", raw)
    if not digits:
        return None
    number = digits.group(1).replace(",", "")
    # Amounts the column cannot hold are dropped rather than stored wrong
    if not number or len(number) > len(str(BIGINT_MAX)):
        return None
    amount = int(number)
    return amount if amount <= BIGINT_MAX else None


def infer_collection(text: str) -> str:
    """Guess whether a document describes a project, a company or a person."""
    if _PROJECT_HINT.search(text):
        return "projects"
    if _COMPANY_HINT.search(text) or _CERT_HINT.search(text):
        return "companies"
    return "people"


def person_fields(text: str) -> Dict[str, Any]:
    return {
        "name": extract_name(text),
        "title": extract_title(text),
        "years": extract_years(text),
        "education": extract_education(text),
        "licenses": _split_list(_labeled(text, "Licenses", "License")),
        "specialties": extract_specialties(text),
        "bio_short": generate_short_bio(text),
        "bio_medium": generate_medium_bio(text),
        "bio_long": generate_long_bio(text),
    }


def company_fields(text: str) -> Dict[str, Any]:
    return {
        "name": _labeled(text, "Company", "Company Name", "Name") or _first_short_line(text) or DEFAULT_NAME,
        "location": _labeled(text, "Location", "Address", "Headquarters"),
        "services": extract_services(text),
        "dbe": bool(re.search(r"\bDBE\b", text)),
        "mbe": bool(re.search(r"\bMBE\b", text)),
        "certifications": _split_list(_labeled(text, "Certifications", "Certification")),
        "profile": generate_long_bio(text),
    }


def project_fields(text: str) -> Dict[str, Any]:
    return {
        "name": _labeled(text, "Project", "Project Name", "Name") or _first_short_line(text) or DEFAULT_NAME,
        "client": _labeled(text, "Client", "Owner"),
        "location": _labeled(text, "Location"),
        "start_date": _clip(_labeled(text, "Start Date", "Start"), DATE_CHARS),
        "end_date": _clip(_labeled(text, "End Date", "Completion Date", "Completion"), DATE_CHARS),
        "value": extract_value(text),
        "funding": _labeled(text, "Funding", "Funding Source"),
        "type": _clip(_labeled(text, "Project Type", "Type"), TYPE_CHARS),
        "services": extract_services(text),
        "description": generate_medium_bio(text),
        "outcome": _labeled(text, "Outcome", "Results", "Result"),
    }


_EXTRACTORS = {
    "people": person_fields,
    "companies": company_fields,
    "projects": project_fields,
}


def build_draft(text: str, mime_type: Optional[str] = None) -> Draft:
    """
    Build an AI-Generated draft record from document text.

    mime_type is informational; all content is treated as plain text.
    """
    text = text or ""
    collection = infer_collection(text)
    fields = _EXTRACTORS[collection](text)
    fields["status"] = RecordStatus.AI_GENERATED.value

    logger.info(
        f"Extracted {collection} draft from {len(text)} chars ({mime_type or 'unknown type'})"
    )
    return Draft(collection=collection, fields=fields)
