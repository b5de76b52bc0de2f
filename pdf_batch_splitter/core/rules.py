"""
Identifier rules: labeled patterns that pull an identifier out of page text.
File: pdf_batch_splitter/core/rules.py

Rules are applied in list order. The first rule that matches a page
supplies its primary identifier; later matches become additional
identifiers. Patterns are compiled once, when the rule is built.
"""

import re

from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

from pdf_batch_splitter.core.exceptions import InvalidRuleError
from pdf_batch_splitter.core.regex_patterns import RULE_SPEC_RGX


# Informational only; never consulted when resolving identifiers
RULE_KINDS = ('numeric', 'alphanumeric', 'alpha')


@dataclass(frozen=True)
class IdentifierRule:
    """An ordered, labeled pattern with a designated capture group."""
    label: str
    pattern: str
    capture_group: int = 1
    kind: Optional[str] = None
    compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.capture_group, int) or self.capture_group < 1:
            raise InvalidRuleError(self.label, f"capture group must be a positive integer, got {self.capture_group!r}")

        if self.kind is not None and self.kind not in RULE_KINDS:
            raise InvalidRuleError(self.label, f"unknown kind '{self.kind}' (expected one of {', '.join(RULE_KINDS)})")

        # DOTALL so a wildcard can span the line breaks between a value and its field label
        try:
            compiled = re.compile(self.pattern, re.DOTALL)
        except re.error as e:
            raise InvalidRuleError(self.label, f"pattern does not compile: {e}") from e

        object.__setattr__(self, 'compiled', compiled)

    def search(self, text: str) -> Optional[re.Match]:
        """Return the first match in text by position, or None."""
        return self.compiled.search(text)


# Rule set for school exam documents (timetables, statements of entry)
DEFAULT_RULES = [
    IdentifierRule("Admission Number", r"([0-9]{5,6}).*(Admission Number)", 1, 'numeric'),
    IdentifierRule("Candidate Number", r"([0-9]{4})(Candidate Number)", 1, 'numeric'),
    IdentifierRule("UPN", r"(UPN:?)[\s\S]:?([a-zA-Z0-9]+)", 2, 'alphanumeric'),
    IdentifierRule("ULN", r"(ULN:?)[\s\S]:?([0-9]+)", 2, 'numeric'),
    IdentifierRule("Candidate Number", r"([0-9]{4})\s[\s\S]*[0-9]{10}[a-zA-Z][\s\S]*(Candidate Number)", 1, 'numeric'),
    IdentifierRule("ULN", r"([0-9]{10})(ULN)", 1, 'numeric'),
    IdentifierRule("Name", r"([a-zA-Z]+,\s[a-zA-Z]+)(Name)", 1, 'alphanumeric'),
]


def parse_rule_spec(spec: str) -> IdentifierRule:
    """
    Build a rule from a compact definition string.

    Format: LABEL::GROUP::REGEX

    Examples:
        "Admission Number::1::([0-9]{5,6}).*(Admission Number)"
        "UPN::2::(UPN:?)[\\s\\S]:?([a-zA-Z0-9]+)"

    Raises:
        InvalidRuleError: If the definition is malformed or the regex is invalid
    """
    match = RULE_SPEC_RGX.match(spec.strip())
    if not match:
        raise InvalidRuleError(spec, "expected LABEL::GROUP::REGEX")

    return IdentifierRule(
        label=match.group('label').strip(),
        pattern=match.group('pattern'),
        capture_group=int(match.group('group'))
    )


def load_rules_file(rules_path: Path) -> list[IdentifierRule]:
    """
    Read rule definitions from a text file, one per line.

    Blank lines and lines starting with '#' are ignored. Order in the
    file is the order the rules are applied.
    """
    rules = []
    with open(rules_path, 'rb') as f:
        for line_num, raw_line in enumerate(f, 1):
            try:
                line = raw_line.decode('utf-8').rstrip('\r\n')
            except UnicodeDecodeError as e:
                raise InvalidRuleError(raw_line.decode('utf-8', errors='replace').strip(),
                                        f"not valid UTF-8 at byte {e.start} "
                                        f"({rules_path.name} line {line_num})") from e
            if not line.strip() or line.lstrip().startswith('#'):
                continue
            try:
                rules.append(parse_rule_spec(line))
            except InvalidRuleError as e:
                raise InvalidRuleError(e.rule_label, f"{e.reason} ({rules_path.name} line {line_num})") from e
    return rules


# End of file #
