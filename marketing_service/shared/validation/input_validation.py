"""
Input validation and sanitization for website form fields.
Protects stored submissions against XSS when they are later rendered.
"""

import re
import html
from typing import Optional
from fastapi import HTTPException, status


# Maximum lengths for different input types
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_SCHOOL_LENGTH = 200
MAX_CHOICE_LENGTH = 50
MAX_MESSAGE_LENGTH = 2000

DANGEROUS_PATTERNS = [
    r'<script',
    r'javascript:',
    r'on\w+\s*=',  # onclick=, onerror=, etc.
    r'data:text/html',
    r'vbscript:',
]


def sanitize_text(text: str, max_length: Optional[int] = None, allow_html: bool = False) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Args:
        text: Input text to sanitize
        max_length: Maximum length of the raw text, applied before escaping (None for no limit)
        allow_html: If False, HTML entities are escaped (default: False)

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = text.strip()

    # Truncate before escaping so an entity is never cut in half
    if max_length and len(text) > max_length:
        text = text[:max_length]

    if not allow_html:
        text = html.escape(text)

    return text


def validate_required_text(value: str, field_name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    """
    Validate and sanitize a required single-line field (first name, last name, school).

    Raises:
        HTTPException if the value is blank, longer than max_length or contains script-like content
    """
    if not value or not value.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field_name} cannot be empty"
        )

    if len(value.strip()) > max_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field_name} must be no more than {max_length} characters"
        )

    for pattern in DANGEROUS_PATTERNS:
        if re.search(pattern, value, re.IGNORECASE):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{field_name} contains invalid characters"
            )

    return sanitize_text(value)


def validate_optional_text(value: Optional[str], field_name: str, max_length: int) -> Optional[str]:
    """
    Validate and sanitize an optional field. Blank values become None.

    Raises:
        HTTPException if the value is longer than max_length or contains script-like content
    """
    if value is None or not value.strip():
        return None

    value = value.strip()

    if len(value) > max_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field_name} must be no more than {max_length} characters"
        )

    for pattern in DANGEROUS_PATTERNS:
        if re.search(pattern, value, re.IGNORECASE):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{field_name} contains invalid content"
            )

    return html.escape(value)


def validate_email(email: str) -> str:
    """
    Normalize an email address and check its length.
    Note: Pydantic's EmailStr already validates format.

    Returns:
        Normalized email (trimmed, lowercase)

    Raises:
        HTTPException if validation fails
    """
    if not email or not email.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email cannot be empty"
        )

    email = email.strip().lower()

    if len(email) > MAX_EMAIL_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Email must be no more than {MAX_EMAIL_LENGTH} characters"
        )

    return email
