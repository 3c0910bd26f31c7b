"""Source readers: turn profiles, tasks and attachments into variable layers.

A layer maps template variable names to values. ``None`` means the source
has nothing for that variable; the resolver never lets it overwrite a value
from a lower layer.
"""

import logging
from collections.abc import Mapping
from datetime import date
from urllib.parse import unquote, urlsplit

import httpx

from famdocs.engine.models import AttachmentFacts, Profile, Task
from famdocs.engine.patterns import (
    extract_amount,
    extract_invoice_date,
    extract_invoice_ref,
    extract_invoice_ref_from_filename,
    format_date_fr,
)
from famdocs.interfaces.extractor import BaseOcrClient, BaseTextExtractor
from famdocs.interfaces.fetcher import AttachmentFetchError, BaseAttachmentFetcher

logger = logging.getLogger(__name__)

Layer = dict[str, str | None]


# =============================================================================
# Alias tables
# =============================================================================

_PERSON_ROLES = ("parent", "declarant", "customer", "tenant", "sender", "host", "mandant")

PROFILE_ALIASES: Mapping[str, tuple[str, ...]] = {
    "full_name": (
        "parentName",
        "declarantName",
        "customerName",
        "tenantName",
        "senderName",
        "hostName",
        "employeeName",
        "mandantName",
    ),
    "address": (*(f"{role}Address" for role in _PERSON_ROLES), "newAddress"),
    "postal_code": (*(f"{role}PostalCode" for role in _PERSON_ROLES), "newPostalCode"),
    "city": (*(f"{role}City" for role in _PERSON_ROLES), "newCity", "city"),
}

TASK_CONTACT_ALIASES: Mapping[str, tuple[str, ...]] = {
    "contact_email": ("contactEmail",),
    "contact_phone": ("contactPhone", "parentPhone"),
    "contact_name": (
        "contactName",
        "recipientName",
        "providerName",
        "schoolName",
        "crecheName",
        "doctorName",
    ),
}

TASK_DEADLINE_ALIASES: tuple[str, ...] = (
    "absenceDate",
    "prestationDate",
    "sortieDate",
    "startDate",
    "effectiveDate",
    "leaveDate",
    "resiliationDate",
)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def expand_aliases(layer: Layer, names: tuple[str, ...], value: str | None) -> None:
    """Set every name in ``names`` to ``value`` when it is non-empty."""
    cleaned = _clean(value)
    if cleaned is None:
        return
    for name in names:
        layer[name] = cleaned


def facts_layer(facts: AttachmentFacts) -> Layer:
    """Variables carried by extracted invoice facts."""
    return {
        "invoiceRef": facts.invoice_ref,
        "invoiceAmount": facts.invoice_amount,
        "invoiceDate": facts.invoice_date,
    }


def extract_facts(text: str | None) -> AttachmentFacts:
    """Run the invoice extractors over a block of text."""
    s = text or ""
    return AttachmentFacts(
        invoice_ref=extract_invoice_ref(s),
        invoice_amount=extract_amount(s),
        invoice_date=extract_invoice_date(s),
        text_length=len(s),
    )


# =============================================================================
# Readers
# =============================================================================


class ProfileReader:
    """Builds the lowest-precedence layer from the family profile."""

    def read(self, profile: Profile, today: date) -> Layer:
        layer: Layer = {"date": format_date_fr(today)}

        full_name = profile.full_name
        expand_aliases(layer, PROFILE_ALIASES["full_name"], full_name)
        expand_aliases(layer, PROFILE_ALIASES["address"], profile.address)
        expand_aliases(layer, PROFILE_ALIASES["postal_code"], profile.postal_code)
        expand_aliases(layer, PROFILE_ALIASES["city"], profile.city)

        if profile.children:
            first = profile.children[0]
            layer["childName"] = _clean(first.first_name)
            layer["patientName"] = _clean(first.first_name)
            if first.birth_date:
                layer["childBirthDate"] = format_date_fr(first.birth_date)

        if not full_name and profile.spouse:
            layer["parentName"] = _clean(profile.spouse.first_name)

        return layer


class TaskReader:
    """Builds the task layer and the attachment layer.

    Args:
        fetcher: Downloads attachment bytes.
        text_extractor: Reads the text layer of PDF attachments.
        ocr_client: Fallback for attachments without usable text.
    """

    def __init__(
        self,
        fetcher: BaseAttachmentFetcher,
        text_extractor: BaseTextExtractor,
        ocr_client: BaseOcrClient,
    ) -> None:
        self.fetcher = fetcher
        self.text_extractor = text_extractor
        self.ocr_client = ocr_client

    def read(self, task: Task) -> Layer:
        """Variables taken from the task's own fields and text."""
        layer: Layer = {}
        for field_name, names in TASK_CONTACT_ALIASES.items():
            expand_aliases(layer, names, getattr(task, field_name))

        deadline = task.deadline_date
        if deadline:
            expand_aliases(layer, TASK_DEADLINE_ALIASES, format_date_fr(deadline))

        layer.update(facts_layer(extract_facts(task.text)))
        return layer

    async def read_attachment(self, task: Task) -> Layer:
        """Variables read from the task's attachment.

        Fetching, text extraction and OCR are awaited in sequence. Any
        failure is logged and yields an empty layer for the facts involved.
        """
        url = _clean(task.attachment_url)
        if not url:
            return {}

        text = await self._attachment_text(url)
        facts = extract_facts(text)
        if not facts.invoice_ref:
            filename_ref = extract_invoice_ref_from_filename(_filename_from_url(url))
            if filename_ref:
                facts = facts.model_copy(update={"invoice_ref": filename_ref})

        logger.info(
            f"Attachment facts for task {task.id}: ref={facts.invoice_ref!r}, "
            f"amount={facts.invoice_amount!r}, date={facts.invoice_date!r}, "
            f"text_length={facts.text_length}"
        )
        return facts_layer(facts)

    async def _attachment_text(self, url: str) -> str | None:
        text: str | None = None

        try:
            attachment = await self.fetcher.fetch_bytes(url)
            if attachment.is_pdf:
                text = await self.text_extractor.extract_text(attachment.data)
        except (AttachmentFetchError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Could not read attachment text from {url}: {e}")
        except Exception as e:
            # pypdf raises a wide range of errors on damaged files
            logger.warning(f"Attachment text extraction failed for {url}: {e}", exc_info=True)

        if text:
            return text

        try:
            text = await self.ocr_client.ocr_text(url)
        except Exception as e:
            logger.warning(f"OCR failed for {url}: {e}")
            return None

        return text


def _filename_from_url(url: str) -> str:
    path = urlsplit(url).path
    return unquote(path.rsplit("/", 1)[-1])
