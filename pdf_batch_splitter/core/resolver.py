"""
Identifier resolution: apply the ordered rule list to a page's text.
File: pdf_batch_splitter/core/resolver.py
"""

from pdf_batch_splitter.core.page import Page
from pdf_batch_splitter.core.rules import IdentifierRule
from pdf_batch_splitter.core.exceptions import InvalidRuleError


def resolve(page: Page, rules: list[IdentifierRule]) -> Page:
    """
    Populate a page's identifiers from the first match of each rule.

    Every rule is tried, in order, whatever the earlier rules did. The
    first rule that matches supplies the primary identifier and each
    later match is appended as an additional identifier. A page no
    rule matches is left unresolved.

    Args:
        page: Page to resolve (its identifier state is replaced)
        rules: Ordered identifier rules

    Returns:
        The same page, for chaining

    Raises:
        InvalidRuleError: If a rule's capture group is not present in its match
    """
    page.clear_identifiers()

    for rule in rules:
        match = rule.search(page.raw_text)
        if match is None:
            continue

        if rule.capture_group > match.re.groups:
            raise InvalidRuleError(
                rule.label,
                f"capture group {rule.capture_group} requested but pattern has {match.re.groups}",
                page.index
            )

        captured = match.group(rule.capture_group)
        if captured is None:
            raise InvalidRuleError(
                rule.label,
                f"capture group {rule.capture_group} did not take part in the match",
                page.index
            )

        page.add_identifier(captured.strip())

    return page


# End of file #
