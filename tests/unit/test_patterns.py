"""Unit tests for the fact extractors."""

from datetime import date

import pytest

from famdocs.engine.models import Child
from famdocs.engine.patterns import (
    extract_amount,
    extract_explicit_child_name,
    extract_explicit_date,
    extract_invoice_date,
    extract_invoice_ref,
    extract_invoice_ref_from_filename,
    find_child_by_name,
    fold_text,
    format_date_fr,
    select_child,
)


# =============================================================================
# Invoice Reference Tests
# =============================================================================


class TestInvoiceRef:
    """Test suite for extract_invoice_ref."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Facture n° CE25/3924\nTotal TTC : 120,50 €", "CE25/3924"),
            ("Facture numéro : 123456", "123456"),
            ("Invoice number 456789", "456789"),
            ("Votre n° de facture : 01B6060107", "01B6060107"),
            ("Réf. facture : FA2024-001", "FA2024-001"),
            ("Facture : FA2024-001", "FA2024-001"),
            ("Facture : CE25-3924", "CE25-3924"),
        ],
    )
    def test_labeled_forms(self, text, expected):
        assert extract_invoice_ref(text) == expected

    def test_ocr_noise_between_label_and_separator(self):
        assert extract_invoice_ref("FACTURE m* : CE25/3924") == "CE25/3924"

    def test_multi_token_reference_truncated_at_date(self):
        text = "Facture n° 01B6060107 25H9-1J10 2025-10-28"
        assert extract_invoice_ref(text) == "01B6060107 25H9-1J10"

    def test_reference_never_crosses_line_break(self):
        text = "Facture n° CE25/3924\n2025 Orange SA"
        assert extract_invoice_ref(text) == "CE25/3924"

    def test_operator_code_split_by_layout(self):
        text = "Client 01B6060107\nPériode 25H9- 1J10"
        assert extract_invoice_ref(text) == "01B6060107 25H9-1J10"

    def test_generic_letters_and_digits(self):
        assert extract_invoice_ref("Votre facture INV12345 est disponible") == "INV12345"

    def test_rejects_long_numeric_candidate(self):
        assert extract_invoice_ref("Facture n° 1234567890123") is None

    def test_rejects_date_as_reference(self):
        assert extract_invoice_ref("Facture n° 12/01/2025") is None
        assert extract_invoice_ref("Date de facture : 28/10/2025 12345") is None

    @pytest.mark.parametrize(
        "text", [None, "", "   ", "Payer facture Selfbox - 98,00€", "Payer facture EDF - 120 €"]
    )
    def test_no_reference(self, text):
        assert extract_invoice_ref(text) is None

    def test_reference_from_filename(self):
        assert extract_invoice_ref_from_filename("facture_9078906805_2025-10-28.pdf") == "9078906805"

    def test_filename_without_reference(self):
        assert extract_invoice_ref_from_filename("scan.pdf") is None
        assert extract_invoice_ref_from_filename(None) is None


# =============================================================================
# Amount Tests
# =============================================================================


class TestAmount:
    """Test suite for extract_amount."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Payer facture Selfbox - 98,00€", "98.00"),
            ("TOTAL TTC : 120,50 €", "120.50"),
            ("Net à payer : 45.90 EUR", "45.90"),
            ("Total TTC 1 234,56 €", "1234.56"),
            ("Prix 30 €", "30"),
        ],
    )
    def test_amounts(self, text, expected):
        assert extract_amount(text) == expected

    def test_total_ttc_has_priority(self):
        text = "Montant : 10,00 €\nTotal TTC : 120,50 €"
        assert extract_amount(text) == "120.50"

    def test_number_after_slash_is_not_an_amount(self):
        assert extract_amount("Dossier 2024/150 €") is None

    def test_amount_after_a_date(self):
        assert extract_amount("Échéance 15/12/2025 98,00 €") == "98.00"
        assert extract_amount("Échéance 2025 150,00 €") == "150.00"

    def test_thousands_tail_is_not_an_amount(self):
        assert extract_amount("Encours 2 500.00 €") is None

    def test_out_of_range(self):
        assert extract_amount("Total : 0,00 €") is None
        assert extract_amount("Montant : 2 500 000,00 €") is None

    def test_no_currency(self):
        assert extract_amount("Total 120,50") is None


# =============================================================================
# Date Tests
# =============================================================================


class TestDates:
    """Test suite for invoice and explicit date extraction."""

    def test_labeled_invoice_date(self):
        assert extract_invoice_date("Date de facture : 28/10/2025") == "28/10/2025"

    def test_month_name_invoice_date(self):
        assert extract_invoice_date("Facturé le 3 mars 2025") == "3 mars 2025"

    def test_bare_invoice_date(self):
        assert extract_invoice_date("Échéance au 05/11/2025") == "05/11/2025"

    def test_single_explicit_date(self):
        assert extract_explicit_date("Absence école Héloïse 15 décembre 2025") == date(2025, 12, 15)

    def test_two_distinct_dates_are_ambiguous(self):
        assert extract_explicit_date("du 15/12/2025 au 16/12/2025") is None

    def test_same_date_written_twice(self):
        assert extract_explicit_date("le 15/12/2025, soit le 15 décembre 2025") == date(2025, 12, 15)

    def test_premier_of_month(self):
        assert extract_explicit_date("Sortie le 1er mars 2026") == date(2026, 3, 1)

    def test_invalid_calendar_day(self):
        assert extract_explicit_date("le 31/02/2025") is None

    def test_past_year_kept_verbatim(self):
        assert extract_explicit_date("le 03/02/2020") == date(2020, 2, 3)

    def test_format_date_fr(self):
        assert format_date_fr(date(2025, 3, 7)) == "07/03/2025"


# =============================================================================
# Child Identity Tests
# =============================================================================


class TestChildIdentity:
    """Test suite for child name extraction and selection."""

    @pytest.fixture
    def children(self):
        return (Child(first_name="Héloïse"), Child(first_name="Charles"))

    def test_phrase_with_school(self):
        assert extract_explicit_child_name("Absence école Héloïse 15 décembre 2025") == "Héloïse"

    def test_justificatif_phrase(self):
        assert extract_explicit_child_name("Justificatif d'absence de marie") == "Marie"

    def test_capitalized_after_absence(self):
        assert extract_explicit_child_name("Absence Lucas lundi") == "Lucas"

    @pytest.mark.parametrize("text", ["Absence école demain", "Absence Lundi", "absence prévue", ""])
    def test_calendar_and_function_words_are_not_names(self, text):
        assert extract_explicit_child_name(text) is None

    @pytest.mark.parametrize(
        "text",
        [
            "Absence crèche fièvre",
            "Absence école rendez-vous médical",
            "Absence école malade",
            "Absence Grippe",
        ],
    )
    def test_motive_words_are_not_names(self, text):
        assert extract_explicit_child_name(text) is None

    def test_excluded_prefixes(self):
        assert extract_explicit_child_name("Absence école fébrile") is None
        assert extract_explicit_child_name("Absence école Consultations", ["consultation"]) is None
        assert extract_explicit_child_name("Absence école Héloïse", ["consultation"]) == "Héloïse"

    def test_find_child_is_accent_blind(self, children):
        assert find_child_by_name(children, "HELOISE").first_name == "Héloïse"
        assert find_child_by_name(children, "Lucas") is None

    def test_select_single_named_child(self, children):
        assert select_child(children, "RDV pédiatre pour Charles").first_name == "Charles"

    def test_select_ambiguous(self, children):
        assert select_child(children, "Sortie scolaire") is None
        assert select_child(children, "Héloïse et Charles malades") is None

    def test_select_only_child(self):
        only = (Child(first_name="Léo"),)
        assert select_child(only, "Sortie scolaire").first_name == "Léo"

    def test_fold_text(self):
        assert fold_text("Héloïse CRÈCHE") == "heloise creche"
