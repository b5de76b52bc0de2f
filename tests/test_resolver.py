"""
Test identifier resolution and composite identifier construction.
File: tests/test_resolver.py
"""

import pytest

from pdf_batch_splitter.core.page import Page
from pdf_batch_splitter.core.rules import DEFAULT_RULES, IdentifierRule
from pdf_batch_splitter.core.resolver import resolve
from pdf_batch_splitter.core.exceptions import InvalidRuleError


ADMISSION = IdentifierRule("Admission Number", r"([0-9]{5,6}).*(Admission Number)", 1)
NUMBER = IdentifierRule("Number", r"No\. (\d+)", 1)
CODE = IdentifierRule("Code", r"Code: ([A-Z]+\d+)", 1)


def test_single_rule_match_sets_primary():
    page = resolve(Page(0, "123456 ... Admission Number"), [ADMISSION])

    assert page.resolved
    assert page.primary_identifier == "123456"
    assert page.additional_identifiers == []
    assert page.composite_identifier() == "123456"


def test_no_digits_before_label_leaves_page_unresolved():
    page = resolve(Page(0, "Jane Doe\nAdmission Number\n123"), [ADMISSION])

    assert not page.resolved
    assert page.primary_identifier is None
    assert page.composite_identifier() is None


def test_later_matches_become_additional_identifiers():
    page = resolve(Page(0, "No. 42\nCode: AB9"), [NUMBER, CODE])

    assert page.primary_identifier == "42"
    assert page.additional_identifiers == ["AB9"]
    assert page.composite_identifier() == "42_AB9"


def test_rule_order_not_text_order_decides_primary():
    page = resolve(Page(0, "No. 42\nCode: AB9"), [CODE, NUMBER])

    assert page.primary_identifier == "AB9"
    assert page.additional_identifiers == ["42"]


def test_failed_rule_does_not_stop_the_scan():
    missing = IdentifierRule("Missing", r"ULN: (\d{10})", 1)
    page = resolve(Page(3, "No. 42\nCode: AB9"), [missing, NUMBER, missing, CODE])

    assert page.primary_identifier == "42"
    assert page.additional_identifiers == ["AB9"]


def test_first_match_by_position_is_used():
    page = resolve(Page(0, "No. 1 and No. 2"), [NUMBER])
    assert page.primary_identifier == "1"


def test_captured_text_is_trimmed():
    rule = IdentifierRule("Name", r"Name:([^\n]*)", 1)
    page = resolve(Page(0, "Name:   Jane  Doe  \nClass: 7"), [rule])

    assert page.primary_identifier == "Jane  Doe"


def test_lone_primary_keeps_interior_whitespace():
    rule = IdentifierRule("Name", r"Name: ([A-Za-z ]+)\n", 1)
    page = resolve(Page(0, "Name: Jane Doe\n"), [rule])

    assert page.composite_identifier() == "Jane Doe"


def test_composite_strips_all_whitespace_when_combined():
    name = IdentifierRule("Name", r"Name: ([A-Za-z ]+)\n", 1)
    form = IdentifierRule("Form", r"Form:\s*(\d+\s[A-Z])", 1)
    page = resolve(Page(0, "Name: Jane Doe\nForm:\t10 B"), [name, form])

    assert page.composite_identifier() == "JaneDoe_10B"
    assert page.composite_identifier("-") == "JaneDoe-10B"


def test_wildcard_spans_line_breaks():
    page = resolve(Page(0, "654321\nSmith, Jane\n\nAdmission Number"), [ADMISSION])
    assert page.primary_identifier == "654321"


def test_resolution_is_idempotent():
    rules = [NUMBER, CODE]
    page = Page(0, "No. 42\nCode: AB9")

    resolve(page, rules)
    first = (page.primary_identifier, list(page.additional_identifiers), page.resolved)
    resolve(page, rules)
    second = (page.primary_identifier, list(page.additional_identifiers), page.resolved)

    assert first == second


@pytest.mark.parametrize("text,expected", [
    ("nothing useful", False),
    ("No. 5", True),
    ("Code: Z1", True),
])
def test_resolved_iff_any_rule_matches(text, expected):
    assert resolve(Page(0, text), [NUMBER, CODE]).resolved is expected


def test_missing_capture_group_is_fatal():
    rule = IdentifierRule("Too far", r"No\. (\d+)", 2)

    with pytest.raises(InvalidRuleError) as excinfo:
        resolve(Page(4, "No. 42"), [rule])

    assert excinfo.value.page_index == 4
    assert excinfo.value.rule_label == "Too far"


def test_missing_capture_group_ignored_when_rule_does_not_match():
    rule = IdentifierRule("Too far", r"No\. (\d+)", 2)
    page = resolve(Page(0, "nothing here"), [rule])
    assert not page.resolved


def test_non_participating_group_is_fatal():
    rule = IdentifierRule("Optional", r"ID(?:-(\d+))?", 1)
    with pytest.raises(InvalidRuleError):
        resolve(Page(0, "ID only"), [rule])


def test_default_rules_on_statement_of_entry_text():
    text = ("Statement of Entry\n"
            "123456 Doe, Jane\n"
            "Admission Number\n"
            "UPN: A123456789012\n")
    page = resolve(Page(0, text), DEFAULT_RULES)

    assert page.primary_identifier == "123456"
    assert "A123456789012" in page.additional_identifiers
