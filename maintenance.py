"""
Maintenance tasks for the courseware backend

- Upload retention: delete stale or suspiciously small files from the
  uploads directory.
- Credential provisioning: generate a random secret for JWT signing.

Both are exposed as Flask CLI commands (see app/cli.py); the retention job
also runs from the background scheduler.
"""

import logging
import os
import secrets
import time

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
MIN_SECRET_BYTES = 32


def cleanup_uploads(uploads_dir, max_age_days=7, min_size_bytes=100, now=None):
    """Remove old or undersized files from the top level of ``uploads_dir``.

    A file is deleted when it was last modified more than ``max_age_days``
    days ago, or when it is smaller than ``min_size_bytes`` (empty or failed
    uploads). Subdirectories and symlinks to directories are never touched.
    A failure on one file is logged and counted; the scan carries on with
    the rest.

    Returns:
        dict: ``deleted``, ``kept``, ``errors`` and ``bytes_deleted`` counts
    """
    result = {'deleted': 0, 'kept': 0, 'errors': 0, 'bytes_deleted': 0}

    if not os.path.isdir(uploads_dir):
        logger.info("Uploads directory %s does not exist, nothing to clean", uploads_dir)
        return result

    now = time.time() if now is None else now
    max_age_seconds = max_age_days * SECONDS_PER_DAY

    with os.scandir(uploads_dir) as entries:
        for entry in entries:
            try:
                # Symlinks are judged by their target; only the link is removed.
                if entry.is_dir():
                    continue

                stats = entry.stat()
                age = now - stats.st_mtime

                if age > max_age_seconds:
                    reason = "older than {} days".format(max_age_days)
                elif stats.st_size < min_size_bytes:
                    reason = "too small ({} bytes)".format(stats.st_size)
                else:
                    result['kept'] += 1
                    continue

                os.unlink(entry.path)
                result['deleted'] += 1
                result['bytes_deleted'] += stats.st_size
                logger.info("Deleted upload %s (%s)", entry.name, reason)
            except OSError:
                result['errors'] += 1
                logger.exception("Failed to process upload %s", entry.name)

    logger.info(
        "Upload cleanup finished: deleted %d files (%.2f KB), kept %d, errors %d",
        result['deleted'], result['bytes_deleted'] / 1024, result['kept'], result['errors'],
    )
    return result


def generate_secret(num_bytes=64):
    """Return ``num_bytes`` of cryptographically secure randomness as hex."""
    if num_bytes < MIN_SECRET_BYTES:
        raise ValueError("Secrets shorter than {} bytes are not allowed".format(MIN_SECRET_BYTES))
    return secrets.token_hex(num_bytes)
