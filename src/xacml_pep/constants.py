"""Application-wide constants for xacml-pep.

Constants that define protocol and client behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Wire protocol
    "XACML_JSON_MEDIA_TYPE",
    "REQUEST_MEMBER",
    "RESPONSE_MEMBER",
    # Category identifiers
    "CATEGORY_ACCESS_SUBJECT",
    "CATEGORY_ACTION",
    "CATEGORY_RESOURCE",
    "CATEGORY_ENVIRONMENT",
    "CATEGORY_RECIPIENT_SUBJECT",
    "CATEGORY_INTERMEDIARY_SUBJECT",
    "CATEGORY_CODEBASE",
    "CATEGORY_REQUESTING_MACHINE",
    "CATEGORY_SHORTHANDS",
    # Timeouts
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "MIN_CONNECT_TIMEOUT_SECONDS",
    "MAX_CONNECT_TIMEOUT_SECONDS",
    "DEFAULT_READ_TIMEOUT_SECONDS",
    "MIN_READ_TIMEOUT_SECONDS",
    "MAX_READ_TIMEOUT_SECONDS",
    # TLS
    "CERT_EXPIRY_WARNING_DAYS",
    # Logging
    "MAX_LOGGED_BODY_CHARS",
    # CLI
    "PASSWORD_ENV_VAR",
]

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for logger names, keychain service, User-Agent
APP_NAME: str = "xacml-pep"

# ============================================================================
# Wire Protocol (XACML JSON Profile)
# ============================================================================

# Used for both Content-Type and Accept
XACML_JSON_MEDIA_TYPE: str = "application/xacml+json"

# Top-level envelope members
REQUEST_MEMBER: str = "Request"
RESPONSE_MEMBER: str = "Response"

# ============================================================================
# Category Identifiers
# ============================================================================

CATEGORY_ACCESS_SUBJECT: str = "urn:oasis:names:tc:xacml:1.0:subject-category:access-subject"
CATEGORY_ACTION: str = "urn:oasis:names:tc:xacml:3.0:attribute-category:action"
CATEGORY_RESOURCE: str = "urn:oasis:names:tc:xacml:3.0:attribute-category:resource"
CATEGORY_ENVIRONMENT: str = "urn:oasis:names:tc:xacml:3.0:attribute-category:environment"
CATEGORY_RECIPIENT_SUBJECT: str = "urn:oasis:names:tc:xacml:1.0:subject-category:recipient-subject"
CATEGORY_INTERMEDIARY_SUBJECT: str = "urn:oasis:names:tc:xacml:1.0:subject-category:intermediary-subject"
CATEGORY_CODEBASE: str = "urn:oasis:names:tc:xacml:1.0:subject-category:codebase"
CATEGORY_REQUESTING_MACHINE: str = "urn:oasis:names:tc:xacml:1.0:subject-category:requesting-machine"

# JSON Profile shorthand names accepted in place of the URNs
CATEGORY_SHORTHANDS: dict[str, str] = {
    "AccessSubject": CATEGORY_ACCESS_SUBJECT,
    "Action": CATEGORY_ACTION,
    "Resource": CATEGORY_RESOURCE,
    "Environment": CATEGORY_ENVIRONMENT,
    "RecipientSubject": CATEGORY_RECIPIENT_SUBJECT,
    "IntermediarySubject": CATEGORY_INTERMEDIARY_SUBJECT,
    "Codebase": CATEGORY_CODEBASE,
    "RequestingMachine": CATEGORY_REQUESTING_MACHINE,
}

# ============================================================================
# Timeouts
# ============================================================================

# The PDP round trip has no timeout unless one is configured; these are the defaults
DEFAULT_CONNECT_TIMEOUT_SECONDS: float = 10.0
MIN_CONNECT_TIMEOUT_SECONDS: float = 1.0
MAX_CONNECT_TIMEOUT_SECONDS: float = 120.0

DEFAULT_READ_TIMEOUT_SECONDS: float = 30.0
MIN_READ_TIMEOUT_SECONDS: float = 1.0
MAX_READ_TIMEOUT_SECONDS: float = 300.0  # 5 minutes

# ============================================================================
# TLS
# ============================================================================

# Warn when the mTLS client certificate expires within this many days
CERT_EXPIRY_WARNING_DAYS: int = 14

# ============================================================================
# Logging
# ============================================================================

# Wire log bodies are truncated to this many characters
MAX_LOGGED_BODY_CHARS: int = 4096

# ============================================================================
# CLI
# ============================================================================

PASSWORD_ENV_VAR: str = "XACML_PEP_PASSWORD"
