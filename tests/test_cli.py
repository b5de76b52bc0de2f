"""
Test the command-line front end.
File: tests/test_cli.py
"""

import pytest

from pypdf import PageObject

from pdf_batch_splitter import cli

from tests.test_pdf_utils import create_test_pdf


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    monkeypatch.setattr(cli, 'setup_signal_handlers', lambda: None)


@pytest.fixture
def batch_pdf(tmp_path):
    return create_test_pdf(tmp_path / "batch.pdf", [
        "Admission Report\n123456\nAdmission Number",
        "Cover sheet",
    ])


def test_default_run_writes_next_to_source(batch_pdf, tmp_path, capsys):
    cli.main([str(batch_pdf), "--prefix", "Summer"])

    assert (tmp_path / "Summer_123456.pdf").exists()
    assert (tmp_path / "AAA_FAILED_TO_READ_1.pdf").exists()
    assert "Wrote 2 PDF files" in capsys.readouterr().out


def test_custom_rule_and_destination(batch_pdf, tmp_path):
    destination = tmp_path / "out"
    destination.mkdir()

    cli.main([str(batch_pdf), "--destination", str(destination),
                "--rule", "Cover::1::(Cover) sheet"])

    assert sorted(p.name for p in destination.iterdir()) == [
        "AAA_FAILED_TO_READ_1.pdf",
        "ExamTimetable_Cover.pdf",
    ]


def test_rules_file(batch_pdf, tmp_path):
    rules_path = tmp_path / "rules.txt"
    rules_path.write_text("# one rule\nAdmission::1::([0-9]{6})\n", encoding='utf-8')
    destination = tmp_path / "out"
    destination.mkdir()

    cli.main([str(batch_pdf), "--destination", str(destination), "--rules-file", str(rules_path)])

    assert (destination / "ExamTimetable_123456.pdf").exists()


def test_dry_run_writes_nothing(batch_pdf, tmp_path, capsys):
    destination = tmp_path / "out"
    destination.mkdir()

    cli.main([str(batch_pdf), "--destination", str(destination), "--dry-run"])

    assert list(destination.iterdir()) == []
    assert "Dry run" in capsys.readouterr().out


def test_blank_prefix_exits_with_error(batch_pdf, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(batch_pdf), "--prefix", "  "])

    assert excinfo.value.code == 1
    assert "prefix" in capsys.readouterr().out


def test_missing_destination_exits_with_error(batch_pdf, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(batch_pdf), "--destination", str(tmp_path / "missing")])
    assert excinfo.value.code == 1


def test_rules_file_not_utf8_exits_with_error(tmp_path, capsys):
    rules_path = tmp_path / "rules.txt"
    rules_path.write_bytes(b"Caf\xe9::1::(a)\n")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--list-rules", "--rules-file", str(rules_path)])
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().out


def test_malformed_rule_exits_with_error(batch_pdf):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(batch_pdf), "--rule", "not a rule"])
    assert excinfo.value.code == 1


def test_rule_and_rules_file_are_exclusive(batch_pdf, tmp_path):
    rules_path = tmp_path / "rules.txt"
    rules_path.write_text("A::1::(a)\n", encoding='utf-8')

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(batch_pdf), "--rule", "A::1::(a)", "--rules-file", str(rules_path)])
    assert excinfo.value.code == 1


def test_list_rules_without_pdf(capsys):
    cli.main(["--list-rules"])
    assert "Identifier Rules" in capsys.readouterr().out


def test_dump_text_shows_page(batch_pdf, capsys):
    cli.main([str(batch_pdf), "--dump-text", "1"])
    assert "123456" in capsys.readouterr().out


def test_dump_text_extraction_crash_exits_with_error(batch_pdf, monkeypatch, capsys):
    def broken_extract_text(self, *args, **kwargs):
        raise TypeError("unsupported operand type(s)")

    monkeypatch.setattr(PageObject, "extract_text", broken_extract_text)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(batch_pdf), "--dump-text", "1"])
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().out


def test_dump_text_page_out_of_range(batch_pdf):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(batch_pdf), "--dump-text", "9"])
    assert excinfo.value.code == 1
