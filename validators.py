from __future__ import annotations
import re
from typing import Tuple

# An octet is 0-255 with at most one leading 0/1 pad ("01", "001" are accepted).
_OCTET = r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_PREFIX = r"(?:3[0-2]|[12]?[0-9])"

_IPV4_RE = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}", re.ASCII)
_IPV4_CIDR_RE = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}/{_PREFIX}", re.ASCII)


def validate(literal: str, is_cidr: bool = False) -> bool:
    """Return True if `literal` is a strict IPv4 (or IPv4/prefix) literal.

    The whole string must match: no whitespace, no trailing newline, and the
    CIDR form takes a numeric prefix 0-32 rather than a dotted netmask.
    """
    if not isinstance(literal, str) or not literal:
        return False
    pattern = _IPV4_CIDR_RE if is_cidr else _IPV4_RE
    return pattern.fullmatch(literal) is not None


def validate_address(literal: str) -> Tuple[bool, str]:
    if not validate(literal, is_cidr=True):
        return False, f"'{literal}' is not a valid IP address (expected e.g. 192.168.1.10/24)."
    return True, ""

def validate_gateway(literal: str) -> Tuple[bool, str]:
    if not validate(literal):
        return False, f"'{literal}' is not a valid gateway IP."
    return True, ""

def validate_dns(literal: str) -> Tuple[bool, str]:
    if not validate(literal):
        return False, f"'{literal}' is not a valid DNS server IP."
    return True, ""
