# waitlist/services/waitlist_service.py
import logging
from typing import Optional

from opentelemetry import trace
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.schema import CreateTable

from waitlist.database.model import WaitlistEntry
from waitlist.database.session import get_session_factory
from waitlist.util.email_util import hash_email, utc_timestamp

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

UNIQUE_SQLSTATE = "23505"                        # PostgreSQL unique_violation
UNIQUE_SQLITE_ERROR = "SQLITE_CONSTRAINT_UNIQUE"


class WaitlistStorageError(Exception):
    """The entry could not be persisted."""


class DuplicateSignupError(WaitlistStorageError):
    """The email hash is already on the waitlist."""


def is_unique_violation(error: BaseException) -> bool:
    """
    Tell whether a storage failure is a uniqueness-constraint violation.

    Driver error codes are checked first. When the driver exposes none, a
    case-insensitive match on "unique" in the error text decides.
    """
    orig = error.orig if isinstance(error, DBAPIError) else error

    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == UNIQUE_SQLSTATE

    # plain SQLITE_CONSTRAINT carries no detail, so it falls through to the text
    sqlite_name = getattr(orig, "sqlite_errorname", None) or ""
    if sqlite_name.startswith("SQLITE_CONSTRAINT_"):
        return sqlite_name == UNIQUE_SQLITE_ERROR

    return "unique" in str(error).lower()


def ensure_table(db: Session) -> None:
    db.connection().execute(CreateTable(WaitlistEntry.__table__, if_not_exists=True))
    db.commit()


def save_entry(
    db: Session,
    email: str,
    email_hash: str,
    created_at: str,
    source_ip: Optional[str] = None,
) -> WaitlistEntry:
    entry = WaitlistEntry(
        email=email,
        email_hash=email_hash,
        created_at=created_at,
        source_ip=source_ip,
    )
    try:
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry
    except SQLAlchemyError:
        db.rollback()
        raise


def register_signup(database_url: str, email: str, source_ip: Optional[str] = None) -> WaitlistEntry:
    """
    Persist a normalized, validated email on the waitlist.

    Raises:
        DuplicateSignupError: the address is already registered
        WaitlistStorageError: any other storage failure
    """
    with tracer.start_as_current_span("register_signup") as span:
        email_hash = hash_email(email)
        created_at = utc_timestamp()
        span.set_attribute("email_hash", email_hash)

        try:
            SessionLocal = get_session_factory(database_url)
            with SessionLocal() as db:
                ensure_table(db)
                entry = save_entry(db, email, email_hash, created_at, source_ip)
        except SQLAlchemyError as e:
            if is_unique_violation(e):
                span.set_attribute("duplicate", True)
                logger.info(f"[WAITLIST] duplicate signup for hash {email_hash}")
                raise DuplicateSignupError(email_hash) from e
            span.set_attribute("error", type(e).__name__)
            logger.error(f"[WAITLIST] unable to save signup {email_hash}: {e}", exc_info=True)
            raise WaitlistStorageError("Unable to save waitlist entry") from e

        span.set_attribute("entry_id", entry.id)
        logger.info(f"[WAITLIST] saved signup #{entry.id}")
        return entry
