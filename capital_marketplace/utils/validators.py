# capital_marketplace/utils/validators.py
import re

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_REPEATED_DOTS = re.compile(r"\.{2,}")
MAX_FILENAME_LENGTH = 100


def validate_email(email: str) -> str:
    """Validate email format."""
    email = email.strip()
    if "@" not in email or "." not in email.split("@")[-1]:
        raise ValueError(f"Invalid email: {email}")
    return email.lower()


def sanitize_file_name(file_name: str) -> str:
    """Strip path-traversal and shell-unsafe characters from an uploaded file name."""
    name = _UNSAFE_FILENAME_CHARS.sub("_", file_name)
    name = _REPEATED_DOTS.sub(".", name)
    return name[:MAX_FILENAME_LENGTH]
