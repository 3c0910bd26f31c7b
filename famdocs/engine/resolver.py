"""Variable resolution: merge source layers and apply template rules.

Layers are merged from lowest to highest precedence:

1. profile defaults;
2. task-derived values and attachment-derived values (the attachment sits
   above the task only for templates that treat it as authoritative);
3. template augmentation;
4. caller overrides.

In the derived layers an empty value never replaces a non-empty one. Caller
overrides distinguish ``None`` (no opinion) from ``""`` (leave this blank).
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date

from famdocs.engine.models import Profile, Task, Template, VariableSet
from famdocs.engine.motives import (
    ABSENCE_MOTIVE_WORDS,
    AbsenceVariant,
    absence_motive_sentence,
    contestation_reason,
    sworn_declaration,
)
from famdocs.engine.patterns import (
    extract_explicit_child_name,
    extract_explicit_date,
    find_child_by_name,
    format_date_fr,
    select_child,
)
from famdocs.engine.readers import Layer, ProfileReader, TaskReader

logger = logging.getLogger(__name__)

# Templates whose attachment outranks what the task text says.
ATTACHMENT_AUTHORITATIVE_TEMPLATES = frozenset({"facture_contestation"})

CHILD_KEYS = ("childName", "childBirthDate", "patientName")


def merge_layer(target: dict[str, str], layer: Mapping[str, str | None]) -> None:
    """Merge a derived layer: only non-empty values are written."""
    for key, value in layer.items():
        if value is None or not value.strip():
            continue
        target[key] = value


def fill_unset(target: dict[str, str], layer: Mapping[str, str | None]) -> None:
    """Merge a layer that may only fill keys no other layer has set."""
    for key, value in layer.items():
        if key in target or value is None or not value.strip():
            continue
        target[key] = value


def apply_overrides(target: dict[str, str], overrides: Mapping[str, str | None]) -> None:
    """Merge caller overrides. ``None`` is skipped, ``""`` blanks the key."""
    for key, value in overrides.items():
        if value is None:
            continue
        target[key] = value


# =============================================================================
# Template augmentation
# =============================================================================


@dataclass
class Augmentation:
    """Values computed by a template rule.

    Attributes:
        values: Keys to set (empty values are ignored, as for other layers).
        retractions: Keys to remove from the merged set.
    """

    values: Layer = field(default_factory=dict)
    retractions: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class AugmentationContext:
    template: Template
    task: Task | None
    profile: Profile
    merged: Mapping[str, str]
    today: date


AugmentationRule = Callable[[AugmentationContext], Augmentation]


class AbsenceAugmentation:
    """Absence date, verb, motive sentence and child of an absence letter."""

    def __init__(self, variant: AbsenceVariant) -> None:
        self.variant = variant

    def __call__(self, ctx: AugmentationContext) -> Augmentation:
        result = Augmentation()
        task = ctx.task
        if task is None:
            return result

        text = task.text
        absence_day = extract_explicit_date(text) or task.deadline_date
        if absence_day:
            absence_date = format_date_fr(absence_day)
            is_future_or_today = absence_day >= ctx.today
            result.values["absenceDate"] = absence_date
            result.values["absenceVerb"] = "sera absent(e)" if is_future_or_today else "a été absent(e)"
            result.values["absenceMotiveSentence"] = absence_motive_sentence(
                text, absence_date, is_future_or_today, self.variant
            )

        self._resolve_child(ctx, text, result)
        return result

    def _resolve_child(self, ctx: AugmentationContext, text: str, result: Augmentation) -> None:
        children = ctx.profile.children

        explicit_name = extract_explicit_child_name(text, ABSENCE_MOTIVE_WORDS)
        if explicit_name:
            match = find_child_by_name(children, explicit_name)
            result.values["childName"] = match.first_name if match else explicit_name
            result.values["patientName"] = result.values["childName"]
            if match and match.birth_date:
                result.values["childBirthDate"] = format_date_fr(match.birth_date)
            else:
                result.retractions.add("childBirthDate")
            return

        child = select_child(children, text)
        if child:
            result.values["childName"] = child.first_name
            result.values["patientName"] = child.first_name
            if child.birth_date:
                result.values["childBirthDate"] = format_date_fr(child.birth_date)
            else:
                result.retractions.add("childBirthDate")
        elif len(children) >= 2:
            logger.info(f"Child is ambiguous for task {ctx.task.id if ctx.task else None}; leaving blank")
            result.retractions.update(CHILD_KEYS)


def contestation_augmentation(ctx: AugmentationContext) -> Augmentation:
    """Motive sentence of an invoice contestation, computed from the task text."""
    if ctx.task is None:
        return Augmentation()
    return Augmentation(values={"contestationReason": contestation_reason(ctx.task.text)})


def sworn_statement_augmentation(ctx: AugmentationContext) -> Augmentation:
    """Declaration paragraph of a sworn statement."""
    text = ctx.task.text if ctx.task else ""
    return Augmentation(values={"declarationContent": sworn_declaration(text)})


AUGMENTATION_RULES: Mapping[str, AugmentationRule] = {
    "ecole_absence": AbsenceAugmentation(AbsenceVariant.SCHOOL),
    "creche_absence": AbsenceAugmentation(AbsenceVariant.CRECHE),
    "facture_contestation": contestation_augmentation,
    "attestation_honneur": sworn_statement_augmentation,
}


# =============================================================================
# Resolver
# =============================================================================


class VariableResolver:
    """Merges all variable sources for one template.

    Args:
        task_reader: Reader for the task and attachment layers.
        profile_reader: Reader for the profile layer.
        rules: Augmentation rules keyed by template id.
    """

    def __init__(
        self,
        task_reader: TaskReader,
        profile_reader: ProfileReader | None = None,
        rules: Mapping[str, AugmentationRule] | None = None,
    ) -> None:
        self.task_reader = task_reader
        self.profile_reader = profile_reader or ProfileReader()
        self.rules = AUGMENTATION_RULES if rules is None else rules

    async def resolve(
        self,
        template: Template,
        task: Task | None,
        profile: Profile,
        overrides: Mapping[str, str | None] | None = None,
        today: date | None = None,
    ) -> VariableSet:
        """Build the variable set of a document.

        Args:
            template: The template being filled.
            task: The task the document is generated for, if any.
            profile: The requesting user's profile.
            overrides: Values supplied by the caller.
            today: Reference day for tense and the ``date`` variable.

        Returns:
            The merged variables. Unresolved variables are simply absent.
        """
        today = today or date.today()
        merged: dict[str, str] = {}

        merge_layer(merged, self.profile_reader.read(profile, today))

        if task is not None:
            task_layer = self.task_reader.read(task)
            attachment_layer = await self.task_reader.read_attachment(task)
            if template.id in ATTACHMENT_AUTHORITATIVE_TEMPLATES:
                merge_layer(merged, task_layer)
                merge_layer(merged, attachment_layer)
            else:
                derived: dict[str, str] = {}
                merge_layer(derived, task_layer)
                fill_unset(derived, attachment_layer)
                merge_layer(merged, derived)

        rule = self.rules.get(template.id)
        if rule is not None:
            augmentation = rule(
                AugmentationContext(
                    template=template, task=task, profile=profile, merged=merged, today=today
                )
            )
            for key in augmentation.retractions:
                merged.pop(key, None)
            merge_layer(merged, augmentation.values)

        apply_overrides(merged, overrides or {})

        logger.debug(f"Resolved {len(merged)} variables for template {template.id}")
        return VariableSet(merged)
