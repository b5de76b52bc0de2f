"""Command-line interface for splitting a PDF into pages named from their content."""

import sys
import signal
import argparse

from pathlib import Path
from rich.console import Console
from rich.markup import escape

from pdf_batch_splitter._version import __version__
from pdf_batch_splitter.constants import DEFAULT_PREFIX, DEFAULT_SEPARATOR, DEFAULT_SUFFIX
from pdf_batch_splitter.ui import (
    display_rules_table,
    display_split_table,
    show_page_text,
    show_split_summary
)
from pdf_batch_splitter.core.rules import DEFAULT_RULES, IdentifierRule, load_rules_file, parse_rule_spec
from pdf_batch_splitter.core.pipeline import run
from pdf_batch_splitter.core.document import PyPDFEngine
from pdf_batch_splitter.core.exceptions import ConfigurationError, InvalidRuleError
from pdf_batch_splitter.core.file_conflicts import ConflictResolutionStrategy


console = Console()


def setup_signal_handlers():
    """Setup graceful handling of Ctrl+C interruptions."""
    def signal_handler(sig, frame):
        console.print("\n[yellow]Operation interrupted by user[/yellow]")
        sys.exit(130)  # Standard exit code for Ctrl+C

    signal.signal(signal.SIGINT, signal_handler)


epilog_for_argparse = """
Output names:
    Identified pages:   <prefix>_<identifier>.pdf
    Several rules hit:  <prefix>_<first>_<second>....pdf  (whitespace removed)
    No rule matched:    AAA_FAILED_TO_READ_<n>.pdf        (sorts first in a listing)

Rule syntax (--rule, --rules-file):
    LABEL::GROUP::REGEX
        LABEL   Informational name for the rule
        GROUP   Capture group holding the identifier (1 = first group)
        REGEX   Python regular expression, '.' also matches line breaks

    Rules are tried in order. The first rule that matches names the page,
    later matches are appended. Without --rule/--rules-file the built-in
    school document rules are used (see --list-rules).

Examples:
    %(prog)s timetables.pdf --destination out/
    %(prog)s timetables.pdf --destination out/ --prefix "Summer2024"
    %(prog)s scans.pdf --destination out/ \\
        --rule "Invoice::1::Invoice No\\.?\\s*([A-Z0-9-]+)" \\
        --rule "Customer::1::Customer:\\s*(\\w+)"
    %(prog)s scans.pdf --rules-file rules.txt --dry-run
    %(prog)s scans.pdf --dump-text 3           # Show what the rules see on page 3

Note: No short arguments are provided to ensure clarity and prevent accidents.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-batch-splitter",
        description="PDF Batch Splitter - Split a PDF into single pages named from their content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog_for_argparse
    )

    parser.add_argument('path', type=Path, nargs='?',
        help='Multi-page PDF file to split (not needed with --list-rules)')

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}',
        help='Show program version and exit')

    # Output naming
    naming = parser.add_argument_group('output naming')
    naming.add_argument('--destination', type=Path, metavar='DIR',
        help='Existing folder for the split pages (default: folder of the source PDF)')
    naming.add_argument('--prefix', default=DEFAULT_PREFIX,
        help=f'Prefix for identified pages (default: {DEFAULT_PREFIX})')
    naming.add_argument('--suffix', default=DEFAULT_SUFFIX,
        help=f'Output file extension (default: {DEFAULT_SUFFIX})')
    naming.add_argument('--separator', default=DEFAULT_SEPARATOR, metavar='CHAR',
        help=f'Character between prefix and identifiers (default: {DEFAULT_SEPARATOR})')
    naming.add_argument('--sanitize', action='store_true',
        help='Strip non-alphanumeric characters from identifiers')
    naming.add_argument('--conflicts',
        choices=ConflictResolutionStrategy.ALL,
        default=ConflictResolutionStrategy.OVERWRITE,
        metavar='STRATEGY',
        help=('What to do when two pages get the same name or the file exists: '
            'overwrite (default), rename (add _1, _2, ...), fail (stop the run)'))

    # Identifier rules
    rules = parser.add_argument_group('identifier rules')
    rules.add_argument('--rule', action='append', metavar='LABEL::GROUP::REGEX',
        help='Identifier rule (can be used multiple times, applied in order)')
    rules.add_argument('--rules-file', type=Path, metavar='FILE',
        help='File containing identifier rules, one per line')
    rules.add_argument('--list-rules', action='store_true',
        help='Show the active rules and exit')

    # Inspection
    inspect = parser.add_argument_group('inspection')
    inspect.add_argument('--dump-text', type=int, nargs='?', const=1, metavar='PAGE',
        help='Show the extracted text of a page (default: 1) and exit')
    inspect.add_argument('--dry-run', action='store_true',
        help='Show the filenames that would be written without writing anything')

    return parser


def load_rules(args: argparse.Namespace) -> list[IdentifierRule]:
    """Build the ordered rule list from arguments, falling back to the built-in rules."""
    if args.rule and args.rules_file:
        raise ConfigurationError("Cannot use both --rule and --rules-file", 'rules')

    if args.rules_file:
        if not args.rules_file.is_file():
            raise ConfigurationError(f"Rules file {args.rules_file} does not exist", 'rules_file',
                                        args.rules_file)
        return load_rules_file(args.rules_file)

    if args.rule:
        return [parse_rule_spec(spec) for spec in args.rule]

    return list(DEFAULT_RULES)


def handle_dump_text(pdf_path: Path, page_number: int):
    """Print one page's extracted text so rules can be written against it."""
    engine = PyPDFEngine()
    document = engine.open_document(pdf_path)
    try:
        page_count = engine.page_count(document)
        if not 1 <= page_number <= page_count:
            raise ConfigurationError(f"Page {page_number} is out of range (1-{page_count})",
                                        'dump_text', page_number)
        text = engine.page_text(document, page_number - 1)
    finally:
        engine.close_document(document)

    show_page_text(pdf_path, page_number, page_count, text)


def main(argv: list[str] = None):
    """
    Main entry point for the PDF Batch Splitter.

    Design note: This tool intentionally uses only long arguments (--flag)
    without short versions (-f) to ensure clarity and prevent accidental
    misuse.
    """
    setup_signal_handlers()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        rules = load_rules(args)

        if args.list_rules:
            display_rules_table(rules)
            return

        if args.path is None:
            parser.error("a PDF file is required")
        if not args.path.is_file():
            raise ConfigurationError(f"{args.path} is not a valid file", 'source', args.path)

        if args.dump_text is not None:
            handle_dump_text(args.path, args.dump_text)
            return

        destination = args.destination if args.destination is not None else args.path.parent

        result = run(
            args.path,
            rules,
            destination,
            args.prefix,
            args.suffix,
            separator=args.separator,
            collision_policy=args.conflicts,
            sanitize=args.sanitize,
            dry_run=args.dry_run
        )

    except (ConfigurationError, InvalidRuleError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    display_split_table(result)
    show_split_summary(result)


if __name__ == "__main__":
    main()
