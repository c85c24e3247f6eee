"""Per-client TLS context for the PDP channel.

Every transport builds its own ssl.SSLContext from its TLSConfig and hands it
to httpx. The process-wide default SSL context is never modified, so two
clients with different trust settings can coexist in one process.

Trust modes:
- Strict (default): system trust store or the configured CA bundle,
  certificate and hostname verification on.
- Permissive (trust_all_certificates): any certificate and any hostname is
  accepted. For development PDPs with self-signed certificates only.
"""

from __future__ import annotations

__all__ = [
    "check_certificate_expiry",
    "create_ssl_context",
]

import logging
import ssl
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from cryptography import x509

from xacml_pep.constants import CERT_EXPIRY_WARNING_DAYS
from xacml_pep.exceptions import ConfigurationError
from xacml_pep.utils.file_helpers import require_file_exists, resolve_path

if TYPE_CHECKING:
    from xacml_pep.config import TLSConfig

logger = logging.getLogger(__name__)


def create_ssl_context(tls_config: "TLSConfig") -> ssl.SSLContext:
    """Build the SSL context for one client.

    Args:
        tls_config: TLS trust configuration.

    Returns:
        A new ssl.SSLContext owned by the caller.

    Raises:
        ConfigurationError: If the CA bundle or client certificate files are
            missing, unreadable, or expired.
    """
    try:
        if tls_config.ca_bundle_path is not None:
            ca_path = resolve_path(tls_config.ca_bundle_path)
            require_file_exists(ca_path, file_type="CA bundle")
            context = ssl.create_default_context(cafile=str(ca_path))
        else:
            context = ssl.create_default_context()
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e
    except ssl.SSLError as e:
        raise ConfigurationError(f"Invalid CA bundle {tls_config.ca_bundle_path}: {e}") from e

    if tls_config.trust_all_certificates:
        # check_hostname must be cleared before verify_mode can drop to CERT_NONE
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        logger.warning(
            "TLS certificate and hostname verification are disabled for this PDP client "
            "(trust_all_certificates=True). Do not use this setting in production."
        )

    if tls_config.client_cert_path is not None and tls_config.client_key_path is not None:
        _load_client_certificate(context, tls_config.client_cert_path, tls_config.client_key_path)

    return context


def _load_client_certificate(context: ssl.SSLContext, cert_file: str, key_file: str) -> None:
    """Load the mTLS client certificate and key into the context.

    Raises:
        ConfigurationError: If files are missing, invalid, or the certificate expired.
    """
    cert_path = resolve_path(cert_file)
    key_path = resolve_path(key_file)
    try:
        require_file_exists(cert_path, file_type="client certificate")
        require_file_exists(key_path, file_type="client key")
        context.load_cert_chain(certfile=str(cert_path), keyfile=str(key_path))
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e
    except ssl.SSLError as e:
        raise ConfigurationError(f"Invalid client certificate or key: {e}") from e

    check_certificate_expiry(cert_path)


def check_certificate_expiry(cert_path: Path) -> int | None:
    """Check if a client certificate is expired or expiring soon.

    Logs a warning if the certificate expires within CERT_EXPIRY_WARNING_DAYS.

    Args:
        cert_path: Path to PEM certificate file.

    Returns:
        Days until expiry, or None if the certificate could not be parsed.

    Raises:
        ConfigurationError: If the certificate has already expired.
    """
    try:
        cert = x509.load_pem_x509_certificate(cert_path.read_bytes())
    except (OSError, ValueError) as e:
        # ssl already accepted the file, so only the expiry check is skipped
        logger.warning(
            {
                "event": "certificate_expiry_check_failed",
                "message": f"Could not check certificate expiry for {cert_path}: {e}",
                "error_type": type(e).__name__,
            }
        )
        return None

    expires_at = cert.not_valid_after_utc
    days_until_expiry = (expires_at - datetime.now(timezone.utc)).days

    if days_until_expiry < 0:
        raise ConfigurationError(
            f"Client certificate has expired (expired {-days_until_expiry} days ago). Certificate: {cert_path}"
        )
    if days_until_expiry <= CERT_EXPIRY_WARNING_DAYS:
        logger.warning(
            "Client certificate expires in %d days (on %s). Certificate: %s",
            days_until_expiry,
            expires_at.strftime("%Y-%m-%d"),
            cert_path,
        )
    return days_until_expiry
