"""Generic roster import: one pipeline, parameterised per role.

Each data row is processed on its own. A row either produces an Account
(auth User + UserProfile) and a role Profile, or it produces an entry in
``ImportResult.errors``; one bad row never stops the batch. Account and
Profile are written inside the same savepoint so a failed profile never
leaves a login behind.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from django.conf import settings
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.crypto import get_random_string
from django.utils.text import get_valid_filename

from ..domain_core import AccountStatus, UserProfile
from ..domain_uploads import ImportHistory, ImportStatus
from .helpers import cell_text, clean_name_part, is_blank
from .parser import parse_upload

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")

# email policies
EMAIL_GENERATE_UNLESS_SYNTHETIC = "generate-unless-synthetic"
EMAIL_ALWAYS_GENERATE = "always-generate"
EMAIL_REQUIRED = "required"

GENERATED_PASSWORD_LENGTH = 8


class RowRejected(Exception):
    """A single row failed validation; the message goes into the import errors."""


@dataclass
class ImportRole:
    user_type: str
    profile_model: type
    required_fields: tuple
    email_policy: str
    build_profile: Callable
    account_role: Callable
    template_headers: tuple = ()
    email_prefix: str = ""
    natural_key: str = ""
    natural_key_field: str = ""
    natural_key_label: str = ""
    generate_natural_key: Optional[Callable] = None
    after_create: Optional[Callable] = None


@dataclass
class ImportResult:
    total_records: int = 0
    success_count: int = 0
    error_count: int = 0
    errors: list = field(default_factory=list)

    def record_success(self):
        self.total_records += 1
        self.success_count += 1

    def record_failure(self, row_number, message):
        self.total_records += 1
        self.error_count += 1
        self.errors.append({"row": row_number, "message": message})

    @property
    def status(self):
        if self.error_count == 0:
            return ImportStatus.SUCCESS
        if self.success_count == 0:
            return ImportStatus.FAILED
        return ImportStatus.PARTIAL

    def as_dict(self):
        return {
            "totalRecords": self.total_records,
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "errors": list(self.errors),
        }


def email_in_use(email):
    return User.objects.filter(Q(email__iexact=email) | Q(username__iexact=email)).exists()


def email_domain():
    return getattr(settings, "SCHOOL_EMAIL_DOMAIN", "schoolms.com")


def generate_email(prefix, first_name, last_name, domain=None):
    """``<prefix><first><last>@<domain>``, suffixed 1, 2, ... until unused."""
    domain = domain or email_domain()
    base = f"{prefix}{clean_name_part(first_name)}{clean_name_part(last_name)}"
    candidate = f"{base}@{domain}"
    counter = 1
    while email_in_use(candidate):
        candidate = f"{base}{counter}@{domain}"
        counter += 1
    return candidate


def validate_email(email):
    if not EMAIL_RE.match(email):
        raise RowRejected("Invalid email format")
    if email_in_use(email):
        raise RowRejected("Email already exists")
    return email


def resolve_email(role: ImportRole, row: dict) -> str:
    if role.email_policy == EMAIL_ALWAYS_GENERATE:
        return generate_email(role.email_prefix, row.get("firstName"), row.get("lastName"))

    supplied = cell_text(row.get("email"))
    if role.email_policy == EMAIL_REQUIRED:
        return validate_email(supplied)

    domain = email_domain()
    lowered = supplied.lower()
    if lowered.startswith(role.email_prefix) and lowered.endswith(f"@{domain}"):
        return validate_email(lowered)
    return generate_email(role.email_prefix, row.get("firstName"), row.get("lastName"), domain)


def resolve_natural_key(role: ImportRole, row: dict):
    if role.generate_natural_key is not None:
        return role.generate_natural_key()
    if not role.natural_key:
        return None
    value = cell_text(row.get(role.natural_key))
    lookup = {role.natural_key_field: value}
    if role.profile_model.objects.filter(**lookup).exists():
        raise RowRejected(f"{role.natural_key_label} already exists")
    return value


def create_account(row: dict, email: str, account_role: str, uploader):
    user = User.objects.create_user(
        username=email,
        email=email,
        password=get_random_string(GENERATED_PASSWORD_LENGTH),
        first_name=cell_text(row.get("firstName"))[:150],
        last_name=cell_text(row.get("lastName"))[:150],
    )
    UserProfile.objects.create(
        user=user,
        role=account_role,
        middle_name=cell_text(row.get("middleName"))[:100],
        is_approved=True,
        status=AccountStatus.ACTIVE,
        approved_by=uploader,
        approved_at=timezone.now(),
    )
    return user


def _validation_message(exc: ValidationError) -> str:
    if hasattr(exc, "message_dict"):
        parts = []
        for name, messages in exc.message_dict.items():
            label = "" if name == "__all__" else f"{name}: "
            parts.append(label + " ".join(messages))
        return "; ".join(parts)
    return "; ".join(exc.messages)


def import_row(role: ImportRole, row: dict, uploader):
    """Validate one row and create its Account + Profile. Returns the profile."""
    missing = [name for name in role.required_fields if is_blank(row.get(name))]
    if missing:
        raise RowRejected(f"Missing required fields: {', '.join(missing)}")

    email = resolve_email(role, row)
    natural_key = resolve_natural_key(role, row)
    account_role = role.account_role(row)

    with transaction.atomic():
        user = create_account(row, email, account_role, uploader)
        profile = role.build_profile(row, user, natural_key)
        profile.full_clean()
        profile.save()
    return profile


def import_rows(role: ImportRole, rows: list, uploader) -> ImportResult:
    result = ImportResult()
    for index, row in enumerate(rows):
        # +1 for the header, +1 for 1-based spreadsheet rows
        row_number = index + 2
        try:
            profile = import_row(role, row, uploader)
        except RowRejected as exc:
            result.record_failure(row_number, str(exc))
            continue
        except ValidationError as exc:
            result.record_failure(row_number, _validation_message(exc))
            continue
        except Exception as exc:
            logger.exception("Row %s of %s import failed", row_number, role.user_type)
            result.record_failure(row_number, str(exc) or exc.__class__.__name__)
            continue

        result.record_success()
        if role.after_create is not None:
            try:
                role.after_create(profile, uploader)
            except Exception:
                # the account is already in place; only the follow-up step is lost
                logger.exception("Post-import step failed for %s %s", role.user_type, profile.pk)
    return result


def store_upload(upload) -> str:
    """Write an uploaded file to UPLOAD_TEMP_DIR and return the stored path."""
    target_dir = settings.UPLOAD_TEMP_DIR
    os.makedirs(target_dir, exist_ok=True)
    stamp = timezone.now().strftime("%Y%m%d%H%M%S%f")
    name = f"{stamp}-{get_valid_filename(os.path.basename(upload.name)) or 'upload'}"
    path = os.path.join(target_dir, name)
    with open(path, "wb") as fh:
        for chunk in upload.chunks():
            fh.write(chunk)
    return path


def import_file(role: ImportRole, path: str, original_filename: str, uploader):
    """Parse ``path``, import every row and write the ImportHistory entry.

    The stored file is removed whatever happens. Parse failures propagate as
    ImportFileError without any history row.
    """
    try:
        rows = parse_upload(path)
        logger.info("Importing %d %s rows from %s", len(rows), role.user_type, original_filename)
        result = import_rows(role, rows, uploader)
        history = ImportHistory.objects.create(
            user_type=role.user_type,
            filename=os.path.basename(path),
            original_filename=original_filename[:255],
            uploaded_by=uploader,
            status=result.status,
            total_records=result.total_records,
            success_count=result.success_count,
            error_count=result.error_count,
            errors=result.errors,
        )
        logger.info(
            "%s import %s finished: %d ok, %d failed",
            role.user_type, history.pk, result.success_count, result.error_count,
        )
        return result, history
    finally:
        if path and os.path.exists(path):
            try:
                os.remove(path)
            except OSError:
                logger.warning("Could not remove uploaded file %s", path)
