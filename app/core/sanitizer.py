import re

# Log fields that always hold submitter-identifying values.
PII_FIELDS = frozenset({"submitter_name", "submitter_number", "submitter_email"})


def redact_pii(message: str) -> str:
    """Redact personally identifiable information from log messages.

    Sanitizes email addresses and password-like assignments.
    """
    if not isinstance(message, str):
        return str(message)

    # Emails: user@example.com -> u***@example.com
    message = re.sub(
        r"[\w.+-]+@[\w.-]+\.\w+",
        lambda m: m.group()[0] + "***@" + m.group().split("@")[1],
        message,
    )

    # Password values in common patterns
    message = re.sub(
        r'(password|passwd|pwd|pass|secret)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
        r"\1=[REDACTED]",
        message,
        flags=re.IGNORECASE,
    )

    return message


def mask_value(value) -> str:
    """Keep the first character of a PII value and hide the rest."""
    if value is None:
        return "None"
    text = str(value)
    if not text:
        return ""
    return text[0] + "***"
