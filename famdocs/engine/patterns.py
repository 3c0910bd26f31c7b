"""Deterministic fact extractors for French administrative free text.

Every extractor is a total function: it returns ``None`` when nothing
matches and never raises. Patterns are tried in a fixed priority order and
the first candidate that survives the guards wins. There is no fallback to
weak generic matches: a blank is always preferred over a wrong value.
"""

import logging
import re
import unicodedata
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal, InvalidOperation

from famdocs.engine.models import Child

logger = logging.getLogger(__name__)


# =============================================================================
# Text helpers
# =============================================================================


def fold_text(text: str | None) -> str:
    """Lowercase and strip diacritics ("Héloïse" -> "heloise")."""
    decomposed = unicodedata.normalize("NFD", text or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def words(text: str | None) -> list[str]:
    """Folded alphabetic tokens of a text."""
    return re.findall(r"[a-z]+", fold_text(text))


FRENCH_MONTHS: dict[str, int] = {
    "janvier": 1,
    "fevrier": 2,
    "mars": 3,
    "avril": 4,
    "mai": 5,
    "juin": 6,
    "juillet": 7,
    "aout": 8,
    "septembre": 9,
    "octobre": 10,
    "novembre": 11,
    "decembre": 12,
}

_MONTH_ALTERNATION = (
    r"janvier|f[ée]vrier|mars|avril|mai|juin|juillet|ao[uû]t"
    r"|septembre|octobre|novembre|d[ée]cembre"
)


# =============================================================================
# Invoice reference
# =============================================================================

# A reference is one token containing a digit, optionally followed on the
# same line by further tokens that also contain a digit ("01B6060107 25H9-1J10").
_REF = (
    r"((?=[A-Z0-9\-_/]*\d)[A-Z0-9][A-Z0-9\-_/]{2,}"
    r"(?:[ \t]+(?=[A-Z0-9\-_/]*\d)[A-Z0-9\-_/]+)*)"
)
_NUMBER_MARK = r"(?:num(?:[ée]ro)?|number|n[°º]|no\.?|#)"

_LABELED_REF_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Facture n° CE25/3924", "Invoice number 456", "Facture numéro : 123",
    # "Facture : FA2024-001". Without a number mark a colon is required, so
    # "facture EDF - 120 €" is not a label.
    re.compile(
        rf"\b(?:facture|invoice)[ \t]*(?:{_NUMBER_MARK}[ \t]*[:\-]?|:)[ \t]*{_REF}",
        re.IGNORECASE,
    ),
    # "n° de facture : 01B6060107"
    re.compile(rf"\bn[°º][ \t]*(?:de[ \t]*)?facture[ \t]*[:\-]?[ \t]*{_REF}", re.IGNORECASE),
    # "Réf. facture : FA2024-001"
    re.compile(
        rf"\br[ée]f(?:[ée]rence)?[ \t]*[:.]?[ \t]*(?:de[ \t]+)?facture[ \t]*[:\-]?[ \t]*{_REF}",
        re.IGNORECASE,
    ),
    # "Facture m* : CE25/3924": at most three noise characters, then a colon
    re.compile(
        rf"\b(?:facture|invoice)[ \t]*[^\w\s]{{0,2}}[\w*°º]{{0,3}}[ \t]*:[ \t]*{_REF}",
        re.IGNORECASE,
    ),
)

# Two-segment operator codes ("01B6060107" + "25H9-1J10"), possibly split by
# layout noise in extracted PDF text.
_SPLIT_OPERATOR_REF = re.compile(
    r"\b(\d{2}[A-Z][A-Z0-9]{5,8})\b[\s\S]{0,50}?\b(\d{2}[A-Z]\d-[ \t]*\d[A-Z]\d{2})\b"
)

_STRUCTURED_REF_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(\d{2}[A-Z][A-Z0-9]{5,8})\b"),
    # "CE25/3924"
    re.compile(r"\b([A-Z]{2}\d{2}[/\-]\d{3,})\b"),
    # "INV12345", "FAC2024001"
    re.compile(r"\b([A-Z]{2,4}\d{4,})\b"),
)

_SWALLOWED_DATE = re.compile(
    r"\s+(?:\d{4}[-/.]\d{2}[-/.]\d{2}|\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4})(?!\d)"
)
_WHOLE_DATE = re.compile(r"\d{4}[-/.]\d{1,2}[-/.]\d{1,2}|\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}")

# Longer all-digit strings are SIRET/SIREN or account numbers, not invoice ids.
MAX_NUMERIC_REF_DIGITS = 12


def _clean_invoice_ref(candidate: str) -> str | None:
    """Apply the reference guards; ``None`` when the candidate is rejected."""
    cleaned = re.sub(r"\s+", " ", candidate).strip()
    cleaned = _SWALLOWED_DATE.split(cleaned, maxsplit=1)[0].strip()

    if not cleaned or not re.search(r"\d", cleaned):
        return None
    if _WHOLE_DATE.fullmatch(cleaned.split(" ", 1)[0]):
        return None

    digits = re.sub(r"\D", "", cleaned)
    if re.fullmatch(r"[\d ]+", cleaned) and len(digits) > MAX_NUMERIC_REF_DIGITS:
        logger.debug(f"Rejected numeric reference candidate ({len(digits)} digits)")
        return None

    return cleaned


def _first_valid(matches: Iterable[re.Match[str]]) -> str | None:
    for match in matches:
        groups = [g for g in match.groups() if g]
        if not groups:
            continue
        candidate = _clean_invoice_ref(" ".join(groups))
        if candidate:
            return candidate
    return None


def extract_invoice_ref(text: str | None) -> str | None:
    """Find the invoice reference in a block of text.

    Labeled forms are tried first, then operator-structured codes, then the
    generic letters-plus-digits form.

    Args:
        text: Free text (task text, PDF text layer or OCR output).

    Returns:
        The reference with whitespace collapsed, or None.
    """
    s = text or ""
    if not s.strip():
        return None

    for pattern in _LABELED_REF_PATTERNS:
        found = _first_valid(pattern.finditer(s))
        if found:
            return found

    split = _SPLIT_OPERATOR_REF.search(s)
    if split:
        second = re.sub(r"[ \t]+", "", split.group(2))
        found = _clean_invoice_ref(f"{split.group(1)} {second}")
        if found:
            return found

    for pattern in _STRUCTURED_REF_PATTERNS:
        found = _first_valid(pattern.finditer(s))
        if found:
            return found

    return None


_FILENAME_REF_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"facture[_\s-]([A-Z0-9][A-Z0-9\-_/]{5,}?)(?:[_\s-]\d{4}|\.pdf$|$)", re.IGNORECASE),
    re.compile(r"invoice[_\s-]([A-Z0-9][A-Z0-9\-_/]{5,}?)(?:[_\s-]\d{4}|\.pdf$|$)", re.IGNORECASE),
)


def extract_invoice_ref_from_filename(filename: str | None) -> str | None:
    """Read a reference from names like ``facture_9078906805_2025-10-28.pdf``."""
    if not filename:
        return None

    for pattern in _FILENAME_REF_PATTERNS:
        match = pattern.search(filename)
        if not match:
            continue
        candidate = match.group(1).replace("_", "").strip()
        if len(candidate) >= 6:
            cleaned = _clean_invoice_ref(candidate)
            if cleaned:
                return cleaned

    return None


# =============================================================================
# Monetary amount
# =============================================================================

_AMOUNT = r"(\d{1,3}(?:[  .]\d{3})+(?:,\d{2})?|\d{1,6}(?:[.,]\d{2})?)"
_CURRENCY = r"[ \t ]*(?:€|EUR\b)"

_AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?:total|montant)\s+ttc\s*[:\-]?\s*{_AMOUNT}{_CURRENCY}", re.IGNORECASE),
    re.compile(rf"(?<!\w)[àa]\s+(?:r[ée]gler|payer)\s*[:\-]?\s*{_AMOUNT}{_CURRENCY}", re.IGNORECASE),
    re.compile(rf"\b(?:montant|prix)\s*[:\-]?\s*{_AMOUNT}{_CURRENCY}", re.IGNORECASE),
    re.compile(rf"\btotal\s*[:\-]?\s*{_AMOUNT}{_CURRENCY}", re.IGNORECASE),
    # Any amount with a currency sign, unless it ends a "dd/mm/yyyy"-like run.
    re.compile(rf"(?<![/\d]){_AMOUNT}{_CURRENCY}"),
)

# "2 500 000,00 €" must not yield its "000,00" tail: a match starting with a
# three-digit group right after a short digit run continues a larger number.
_THOUSANDS_HEAD = re.compile(r"(?<![\d.,])\d{1,3}[ \t\u00a0.]$")
_GENERIC_AMOUNT = _AMOUNT_PATTERNS[-1]


def _inside_thousands_group(text: str, match: re.Match[str]) -> bool:
    if not re.match(r"\d{3}(?!\d)", match.group(1)):
        return False
    return bool(_THOUSANDS_HEAD.search(text, 0, match.start(1)))


MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("1000000")


def _normalize_amount(raw: str) -> str:
    """Drop thousands separators and use a dot as decimal separator."""
    compact = re.sub(r"[  ]", "", raw)
    if "," in compact:
        return compact.replace(".", "").replace(",", ".")
    if re.fullmatch(r"\d{1,3}(?:\.\d{3})+", compact):
        return compact.replace(".", "")
    return compact


def extract_amount(text: str | None) -> str | None:
    """Find the amount due, normalized to a dot decimal separator.

    Returns:
        The amount as written (``"98,00"`` -> ``"98.00"``), or None when no
        plausible amount is found.
    """
    s = text or ""
    for pattern in _AMOUNT_PATTERNS:
        for match in pattern.finditer(s):
            if pattern is _GENERIC_AMOUNT and _inside_thousands_group(s, match):
                continue
            amount = _normalize_amount(match.group(1))
            try:
                value = Decimal(amount)
            except InvalidOperation:
                continue
            if MIN_AMOUNT <= value < MAX_AMOUNT:
                return amount
    return None


# =============================================================================
# Dates
# =============================================================================

_INVOICE_DATE_LABEL = r"(?:date\s*(?:de\s*)?facture|factur[ée]e?\s*(?:le|du)?)\s*:?\s*"

_INVOICE_DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"{_INVOICE_DATE_LABEL}(\d{{1,2}}[/.\-]\d{{1,2}}[/.\-]\d{{4}})\b", re.IGNORECASE),
    re.compile(
        rf"{_INVOICE_DATE_LABEL}(\d{{1,2}}(?:er)?\s+(?:{_MONTH_ALTERNATION})\s+\d{{4}})\b",
        re.IGNORECASE,
    ),
    re.compile(r"(?<!\d)(\d{1,2}/\d{1,2}/\d{4})(?!\d)"),
)


def extract_invoice_date(text: str | None) -> str | None:
    """Find the invoice issue date, returned exactly as written."""
    s = text or ""
    for pattern in _INVOICE_DATE_PATTERNS:
        match = pattern.search(s)
        if match:
            return match.group(1)
    return None


_NUMERIC_DATE = re.compile(r"(?<!\d)(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})(?!\d)")
_MONTH_NAME_DATE = re.compile(
    rf"(?<!\d)(\d{{1,2}}|1er)\s+({_MONTH_ALTERNATION})\s+(\d{{4}})(?!\d)",
    re.IGNORECASE,
)


def _calendar_date(year: int, month: int, day: int) -> date | None:
    if not 1900 <= year <= 2100:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def find_explicit_dates(text: str | None) -> set[date]:
    """All distinct, valid calendar dates written out in the text."""
    s = text or ""
    found: set[date] = set()

    for match in _NUMERIC_DATE.finditer(s):
        day, month, year = (int(g) for g in match.groups())
        candidate = _calendar_date(year, month, day)
        if candidate:
            found.add(candidate)

    for match in _MONTH_NAME_DATE.finditer(s):
        raw_day, month_word, raw_year = match.groups()
        day = 1 if raw_day.lower() == "1er" else int(raw_day)
        month = FRENCH_MONTHS.get(fold_text(month_word))
        if not month:
            continue
        candidate = _calendar_date(int(raw_year), month, day)
        if candidate:
            found.add(candidate)

    return found


def extract_explicit_date(text: str | None) -> date | None:
    """The single explicit date of a text.

    Ambiguity is never resolved by guessing: zero or several distinct dates
    yield None. The date is returned as written, never shifted.
    """
    found = find_explicit_dates(text)
    if len(found) != 1:
        if len(found) > 1:
            logger.debug(f"Ignoring {len(found)} competing explicit dates")
        return None
    return next(iter(found))


def format_date_fr(value: date) -> str:
    """Format a calendar date as ``DD/MM/YYYY``."""
    return f"{value.day:02d}/{value.month:02d}/{value.year}"


# =============================================================================
# Child identity
# =============================================================================

_NAME = r"([A-Za-zÀ-ÖØ-öø-ÿ][A-Za-zÀ-ÖØ-öø-ÿ\-]+)"
_CAPITALIZED_NAME = r"([A-ZÀ-ÖØ-Þ][a-zß-öø-ÿ]+(?:-[A-ZÀ-ÖØ-Þ][a-zß-öø-ÿ]+)?)"

_CHILD_NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Absence école Héloïse", "absence crèche Charles"
    re.compile(rf"absence\s+(?:[àa]\s+l['’]\s*)?(?:[ée]cole|cr[èe]che)\s+(?:de\s+|d['’]\s*)?{_NAME}", re.IGNORECASE),
    # "Justificatif d'absence de Marie"
    re.compile(rf"justificatif\s+d['’]?\s*absence\s+(?:de\s+|d['’]\s*){_NAME}", re.IGNORECASE),
    # "Absence de Marie"
    re.compile(rf"absence\s+(?:de\s+|d['’]\s*){_NAME}", re.IGNORECASE),
    # "Absence Héloïse 15 décembre": only a capitalized word counts as a name
    re.compile(rf"(?i:absence)\s+{_CAPITALIZED_NAME}"),
)

# Words that follow "absence" in task titles without being a first name.
_NOT_A_NAME = frozenset(
    {
        "ecole", "creche", "college", "lycee", "cantine", "garderie", "classe",
        "scolaire", "maternelle", "primaire", "enfant", "eleve", "fils", "fille",
        "mon", "ma", "notre", "son", "sa", "le", "la", "les", "du", "des", "de",
        "pour", "maladie", "medicale", "justifiee", "prevue", "demain", "hier",
        "aujourd", "ce", "cette", "semaine", "matin", "apres", "midi", "journee",
        "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche",
        "fievre", "febrile", "temperature", "malade", "malades", "rendez", "rdv",
        "consultation", "medecin", "pediatre", "cours", "gastro", "grippe",
        "rhume", "varicelle", "otite", "vaccin", "vaccination", "hopital",
        "urgences", "dentiste", "orthophoniste", "greve", "vacances",
        *FRENCH_MONTHS,
    }
)


def _capitalize_name(name: str) -> str:
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-") if part)


def _is_not_a_name(candidate: str, excluded_prefixes: tuple[str, ...]) -> bool:
    folded = fold_text(candidate)
    if folded in _NOT_A_NAME or folded.split("-", 1)[0] in _NOT_A_NAME:
        return True
    return folded.startswith(excluded_prefixes)


def extract_explicit_child_name(
    text: str | None, excluded_prefixes: Iterable[str] = ()
) -> str | None:
    """Read a child's first name from phrases such as "Absence école Héloïse".

    Args:
        text: Task title and description.
        excluded_prefixes: Folded word prefixes that are never a first name,
            typically the absence motive triggers ("fiev", "consultation").
    """
    s = (text or "").strip()
    if not s:
        return None

    prefixes = tuple(fold_text(p) for p in excluded_prefixes if p)
    for pattern in _CHILD_NAME_PATTERNS:
        for match in pattern.finditer(s):
            candidate = match.group(1).strip("-")
            if len(candidate) < 2 or _is_not_a_name(candidate, prefixes):
                continue
            return _capitalize_name(candidate)

    return None


def find_child_by_name(children: Sequence[Child], name: str | None) -> Child | None:
    """Profile child whose first name equals ``name`` (case and accent blind)."""
    target = fold_text((name or "").strip())
    if not target:
        return None
    for child in children:
        if fold_text(child.first_name.strip()) == target:
            return child
    return None


def select_child(children: Sequence[Child], text: str | None) -> Child | None:
    """Pick the child a text is about, without guessing.

    Resolves when the profile has exactly one child, or when exactly one
    child's first name appears as a word of the text.
    """
    if not children:
        return None
    if len(children) == 1:
        return children[0]

    tokens = set(words(text))
    matched = []
    for child in children:
        name_tokens = words(child.first_name)
        if name_tokens and all(t in tokens for t in name_tokens):
            matched.append(child)

    if len(matched) == 1:
        return matched[0]
    return None
