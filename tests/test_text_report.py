"""
Tests for plain-text rendering and report/error file output.
"""

import re

from sqlinstancecheck.application.report_rows import (
    DATABASES_SECTION,
    ReportSection,
    build_sections,
)
from sqlinstancecheck.infrastructure.text_report import (
    clear_error,
    format_error_line,
    format_error_message,
    render_report,
    render_section,
    write_error,
    write_report,
)

FMT = "%Y-%m-%d %H:%M:%S"


def _non_blank_lines(text: str) -> list[str]:
    return [line.rstrip() for line in text.splitlines() if line.strip()]


class TestRenderSection:
    """Test cases for single-section rendering."""

    def test_title_line_then_table(self):
        section = ReportSection("Databases", ("Name", "Owner"), [("master", "sa")])
        lines = _non_blank_lines(render_section(section))

        assert lines[0] == "[Databases]"
        assert "Name" in lines[1] and "Owner" in lines[1]
        assert any("master" in line and "sa" in line for line in lines[2:])

    def test_plain_text_without_escape_codes(self):
        section = ReportSection("Backups", ("Name",), [("master",)])
        assert "\x1b[" not in render_section(section)

    def test_brackets_in_values_are_literal(self):
        section = ReportSection("Databases", ("Name",), [("[weird]",)])
        assert "[weird]" in render_section(section)

    def test_empty_section_has_header_only(self):
        section = ReportSection(DATABASES_SECTION, ("Name", "Compatibility Level", "Status"))
        lines = _non_blank_lines(render_section(section))

        assert lines[0] == "[Databases]"
        assert "Compatibility Level" in lines[1]
        # Header underline is the only other line
        assert len(lines) == 3
        assert set(lines[2].strip()) <= {"─", " "}

    def test_long_values_wrap_instead_of_truncating(self):
        edition = " ".join(f"word{i:02d}" for i in range(60))
        section = ReportSection(
            "Instance Information",
            ("Instance", "Edition", "Version"),
            [("SQL01", edition, "15.0.4298.1")],
        )
        text = render_section(section, width=80)

        for i in range(60):
            assert f"word{i:02d}" in text
        assert "…" not in text
        assert max(len(line) for line in text.splitlines()) <= 80

    def test_long_unbroken_value_is_folded(self):
        owner = "X" * 200
        section = ReportSection("Databases", ("Name", "Owner"), [("SalesDB", owner)])
        text = render_section(section, width=60)

        assert "…" not in text
        assert text.count("X") == 200


class TestRenderReport:
    """Test cases for full report rendering."""

    def test_header_and_sections_in_order(self, sample_instance, sample_databases):
        sections = build_sections(sample_instance, sample_databases, FMT)
        text = render_report("SQL01", "2026-10-17 09:30:00", sections)

        assert text.splitlines()[0] == "Check-SqlInstance results for SQL01 on 2026-10-17 09:30:00"
        positions = [
            text.index("[Instance Information]"),
            text.index("[Memory and Parallelism]"),
            text.index("[Databases]"),
            text.index("[Backups]"),
        ]
        assert positions == sorted(positions)

    def test_memory_section_values_under_labels(self, sample_instance):
        sections = build_sections(sample_instance, [], FMT)
        memory = render_section(sections[1])
        lines = _non_blank_lines(memory)

        header = lines[1]
        for label in ("Min Memory (MB)", "Max Memory (MB)", "MaxDOP", "CToP"):
            assert label in header
        assert re.search(r"\b0\b.*\b2147483647\b.*\b4\b.*\b5\b", lines[3])

    def test_zero_databases_renders_headers_only(self, sample_instance):
        sections = build_sections(sample_instance, [], FMT)
        text = render_report("SQL01", "2026-10-17 09:30:00", sections)

        databases_block = text[text.index("[Databases]"):text.index("[Backups]")]
        backups_block = text[text.index("[Backups]"):]
        assert len(_non_blank_lines(databases_block)) == 3
        assert len(_non_blank_lines(backups_block)) == 3
        assert "Recovery Model" in backups_block


class TestWriteReport:
    """Test cases for report file output."""

    def test_write_creates_file(self, tmp_path):
        path = tmp_path / "out" / "report.txt"
        write_report(path, "hello\n")
        assert path.read_text(encoding="utf-8") == "hello\n"

    def test_write_overwrites(self, tmp_path):
        path = tmp_path / "report.txt"
        write_report(path, "first run\n")
        write_report(path, "second run\n")
        assert path.read_text(encoding="utf-8") == "second run\n"

    def test_no_temporary_files_left(self, tmp_path):
        path = tmp_path / "report.txt"
        write_report(path, "content\n")
        assert [p.name for p in tmp_path.iterdir()] == ["report.txt"]

    def test_unicode_content(self, tmp_path):
        path = tmp_path / "report.txt"
        write_report(path, "Base de données ─ 数据库\n")
        assert "数据库" in path.read_text(encoding="utf-8")


class TestErrorFile:
    """Test cases for error file output."""

    def test_error_line_format(self):
        assert format_error_line("2026-10-17 09:30:00", "boom") == "2026-10-17 09:30:00: boom"

    def test_message_collapsed_to_one_line(self):
        error = RuntimeError("[08001] Login timeout expired\n[08001] TCP Provider: error")
        assert "\n" not in format_error_message(error)
        assert format_error_message(error).startswith("[08001] Login timeout expired [08001]")

    def test_empty_message_uses_type_name(self):
        assert format_error_message(KeyError()) == "KeyError"

    def test_write_error_overwrites(self, tmp_path):
        path = tmp_path / "errors.txt"
        write_error(path, "2026-10-16 09:00:00: first")
        write_error(path, "2026-10-17 09:00:00: second")
        assert path.read_text(encoding="utf-8").splitlines() == ["2026-10-17 09:00:00: second"]

    def test_clear_error(self, tmp_path):
        path = tmp_path / "errors.txt"
        assert clear_error(path) is False
        path.write_text("old\n", encoding="utf-8")
        assert clear_error(path) is True
        assert not path.exists()
