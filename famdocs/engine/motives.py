"""Motive buckets: ordered keyword tables mapped to fixed French sentences.

Each table is scanned in order and the first bucket whose triggers match the
folded task text wins. Buckets are never combined. Sentences only restate
what the keywords already say; when nothing matches, a neutral sentence (or
a blank to fill by hand) is used instead of a guess.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from famdocs.engine.models import BLANK_MARKER
from famdocs.engine.patterns import fold_text


class AbsenceVariant(str, Enum):
    """Establishment an absence letter is addressed to."""

    SCHOOL = "school"
    CRECHE = "creche"


class Tense(str, Enum):
    """Whether the described event is today or later, or already past."""

    FUTURE = "future"
    PAST = "past"


ANY = "*"


@dataclass(frozen=True)
class MotiveBucket:
    """One keyword bucket.

    Attributes:
        name: Identifier used in logs and tests.
        triggers: Alternatives of keyword groups. The bucket matches when
            every keyword of at least one group occurs in the folded text.
        sentences: Sentence templates keyed by ``(variant, tense)``; ``ANY``
            acts as a wildcard. Templates may use ``{date}``.
        variants: Variants the bucket applies to, or None for all.
    """

    name: str
    triggers: tuple[tuple[str, ...], ...]
    sentences: Mapping[tuple[str, str], str]
    variants: frozenset[str] | None = field(default=None)

    def matches(self, folded: str, variant: str = ANY) -> bool:
        if self.variants is not None and variant not in self.variants:
            return False
        return any(all(word in folded for word in group) for group in self.triggers)

    def sentence(self, variant: str = ANY, tense: str = ANY, **values: str) -> str:
        for key in ((variant, tense), (variant, ANY), (ANY, tense), (ANY, ANY)):
            template = self.sentences.get(key)
            if template is not None:
                return template.format(**values)
        raise KeyError(f"Bucket '{self.name}' has no sentence for {variant}/{tense}")


def first_match(
    buckets: tuple[MotiveBucket, ...], text: str | None, variant: str = ANY
) -> MotiveBucket | None:
    """First bucket of ``buckets`` matching ``text``, or None."""
    folded = fold_text(text)
    for bucket in buckets:
        if bucket.matches(folded, variant):
            return bucket
    return None


# =============================================================================
# Invoice contestation
# =============================================================================

_CONTESTATION_TAIL = (
    "concernant le détail des prestations facturées et leur conformité au contrat souscrit."
)

DEFAULT_CONTESTATION_REASON = (
    f"Je conteste cette facture dans l’attente de vérifications complémentaires {_CONTESTATION_TAIL}"
)

CONTESTATION_BUCKETS: tuple[MotiveBucket, ...] = (
    MotiveBucket(
        name="double_billing",
        triggers=(("double", "factur"), ("doublon", "factur")),
        sentences={
            (ANY, ANY): (
                "Je conteste cette facture pour un possible cas de double facturation, "
                f"dans l’attente de vérifications complémentaires {_CONTESTATION_TAIL}"
            )
        },
    ),
    MotiveBucket(
        name="amount_too_high",
        triggers=(("trop elev",), ("montant", "incorrect")),
        sentences={
            (ANY, ANY): (
                "Je conteste cette facture car le montant indiqué semble trop élevé, "
                f"dans l’attente de vérifications complémentaires {_CONTESTATION_TAIL}"
            )
        },
    ),
    MotiveBucket(
        name="error",
        triggers=(("erreur",), ("errone",), ("incorrect",)),
        sentences={
            (ANY, ANY): (
                "Je conteste cette facture car elle semble comporter une erreur, "
                f"dans l’attente de vérifications complémentaires {_CONTESTATION_TAIL}"
            )
        },
    ),
    MotiveBucket(
        name="fraud",
        triggers=(("fraude",),),
        sentences={
            (ANY, ANY): (
                "Je conteste cette facture dans le cadre de vérifications complémentaires, "
                f"notamment en raison d’un doute de conformité, {_CONTESTATION_TAIL}"
            )
        },
    ),
)


def contestation_reason(text: str | None) -> str:
    """Contestation sentence for a task text. Never echoes the text itself."""
    bucket = first_match(CONTESTATION_BUCKETS, text)
    if bucket is None:
        return DEFAULT_CONTESTATION_REASON
    return bucket.sentence()


# =============================================================================
# Absence
# =============================================================================

_SCHOOL = AbsenceVariant.SCHOOL.value
_CRECHE = AbsenceVariant.CRECHE.value
_FUTURE = Tense.FUTURE.value
_PAST = Tense.PAST.value

ABSENCE_BUCKETS: tuple[MotiveBucket, ...] = (
    MotiveBucket(
        name="fever",
        triggers=(("febr",), ("fiev",), ("temperature",)),
        variants=frozenset({_CRECHE}),
        sentences={
            (ANY, _FUTURE): (
                "Cette absence est due à un état fébrile nécessitant que l’enfant "
                "reste à domicile le {date}."
            ),
            (ANY, _PAST): (
                "Cette absence était due à un état fébrile ayant nécessité que l’enfant "
                "reste à domicile le {date}."
            ),
        },
    ),
    MotiveBucket(
        name="medical",
        triggers=(
            ("rendez-vous medical",),
            ("rdv medical",),
            ("consultation",),
            ("medecin",),
            ("pediatre",),
        ),
        sentences={
            (_SCHOOL, _FUTURE): "Son absence le {date} sera due à un rendez-vous médical.",
            (_SCHOOL, _PAST): "Son absence le {date} était due à un rendez-vous médical.",
            (_CRECHE, _FUTURE): "Cette absence est due à un rendez-vous médical programmé le {date}.",
            (_CRECHE, _PAST): "Cette absence était due à un rendez-vous médical programmé le {date}.",
        },
    ),
)

# Trigger words of the absence buckets, never read as a child's first name.
ABSENCE_MOTIVE_WORDS: frozenset[str] = frozenset(
    word
    for bucket in ABSENCE_BUCKETS
    for group in bucket.triggers
    for keyword in group
    for word in keyword.split()
)

# Used when no motive is stated: the reason is left blank to fill by hand.
UNKNOWN_ABSENCE_MOTIVE = MotiveBucket(
    name="unknown",
    triggers=(),
    sentences={
        (_SCHOOL, _FUTURE): f"Son absence le {{date}} sera due à {BLANK_MARKER}.",
        (_SCHOOL, _PAST): f"Son absence le {{date}} était due à {BLANK_MARKER}.",
        (_CRECHE, _FUTURE): f"Cette absence est due à {BLANK_MARKER} le {{date}}.",
        (_CRECHE, _PAST): f"Cette absence était due à {BLANK_MARKER} le {{date}}.",
    },
)


def absence_motive_sentence(
    text: str | None,
    absence_date: str,
    is_future_or_today: bool,
    variant: AbsenceVariant,
) -> str:
    """Motive sentence of an absence letter.

    Args:
        text: Task text the motive is read from.
        absence_date: Date already formatted for display.
        is_future_or_today: Selects the tense of the sentence.
        variant: School or crèche wording.

    Returns:
        A complete sentence. Without a recognised motive, the reason part is
        the blank-line marker.
    """
    variant_key = AbsenceVariant(variant).value
    tense = _FUTURE if is_future_or_today else _PAST
    bucket = first_match(ABSENCE_BUCKETS, text, variant_key) or UNKNOWN_ABSENCE_MOTIVE
    return bucket.sentence(variant_key, tense, date=absence_date)


# =============================================================================
# Sworn statement
# =============================================================================

GENERIC_DECLARATION = "Je déclare sur l'honneur que les informations ci-dessus sont exactes."

DECLARATION_BUCKETS: tuple[MotiveBucket, ...] = (
    MotiveBucket(
        name="domicile",
        triggers=(("domicile",), ("adresse",)),
        sentences={(ANY, ANY): "Je déclare sur l'honneur résider à l'adresse mentionnée ci-dessus."},
    ),
)

REFINE_TASK_NOTE = "Note : ce document peut être précisé en modifiant la tâche."


def sworn_declaration(text: str | None) -> str:
    """Declaration paragraph of a sworn statement, followed by the refine note."""
    bucket = first_match(DECLARATION_BUCKETS, text)
    statement = bucket.sentence() if bucket else GENERIC_DECLARATION
    return f"{statement}\n\n{REFINE_TASK_NOTE}"
