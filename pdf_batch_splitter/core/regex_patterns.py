"""
Regex patterns shared by the core modules.
File: pdf_batch_splitter/core/regex_patterns.py
"""

import re

# Rule definition: LABEL::GROUP::REGEX (regex may itself contain '::')
RULE_SPEC_RGX = re.compile(r'^(?P<label>[^:]+?)\s*::\s*(?P<group>\d+)\s*::(?P<pattern>.+)$', re.DOTALL)

# Composite identifier normalization
WHITESPACE_RGX = re.compile(r'\s+')

# Filename sanitization (opt-in)
NON_ALNUM_RGX = re.compile(r'[^0-9A-Za-z]')

# Directory separators never survive into an output filename
PATH_SEPARATOR_RGX = re.compile(r'[/\\]')

# End of file #
