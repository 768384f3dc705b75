from __future__ import annotations

import re

from .errors import ValidationError


# A label may start with one underscore (service records such as _dmarc or _imap._tcp).
RECORD_LABEL_RE = re.compile(r"^_?[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")
DOMAIN_LABEL_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")

RECORD_TYPES = frozenset(
    {
        "A",
        "AAAA",
        "ALIAS",
        "CAA",
        "CDS",
        "CNAME",
        "DNAME",
        "DS",
        "HTTPS",
        "KEY",
        "LOC",
        "MX",
        "NAPTR",
        "NS",
        "OPENPGPKEY",
        "PTR",
        "RP",
        "SPF",
        "SRV",
        "SSHFP",
        "SVCB",
        "TLSA",
        "TXT",
        "WKS",
    }
)


def sanitize_record_name(name: str) -> str:
    """Validate a LiveDNS record name before it is used as a URL path segment.

    ``@`` (zone apex) and ``*`` (wildcard) are accepted as-is. Anything else
    must be dot-separated labels; leading underscores are allowed per label.
    """
    candidate = (name or "").strip()
    if candidate in {"@", "*"}:
        return candidate
    if not candidate:
        raise ValidationError("Record name must not be empty")
    if "/" in candidate or "\\" in candidate:
        raise ValidationError(f"Invalid record name {name!r}: path separators are not allowed")

    labels = candidate.split(".")
    if labels[0] == "*":
        labels = labels[1:]
    for label in labels:
        if not label:
            raise ValidationError(f"Invalid record name {name!r}: empty label")
        if not RECORD_LABEL_RE.match(label):
            raise ValidationError(
                f"Invalid record name {name!r}: labels may only contain letters, digits, "
                "inner hyphens and a leading underscore"
            )
    return candidate


def sanitize_domain_name(domain: str) -> str:
    candidate = (domain or "").strip().lower().rstrip(".")
    if not candidate:
        raise ValidationError("Domain name must not be empty")
    labels = candidate.split(".")
    if len(labels) < 2:
        raise ValidationError(f"Invalid domain name {domain!r}: expected a fully-qualified name")
    for label in labels:
        if not DOMAIN_LABEL_RE.match(label):
            raise ValidationError(f"Invalid domain name {domain!r}")
    return candidate


def normalize_record_type(record_type: str) -> str:
    normalized = (record_type or "").strip().upper()
    if normalized not in RECORD_TYPES:
        raise ValidationError(f"Unsupported record type: {record_type!r}")
    return normalized
