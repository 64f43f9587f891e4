"""
Tests for run accession parsing and the accession list file.
"""

import pytest

from sraprep.data.accessions import parse_runinfo, read_accessions, write_accessions
from sraprep.errors import NoAccessionsError


class TestParseRuninfo:
    """Extracting SRR accessions from efetch runinfo output."""

    def test_keeps_query_order_and_duplicates(self, runinfo_path):
        accessions = parse_runinfo(runinfo_path.read_text())

        assert accessions == ['SRR1000003', 'SRR1000001', 'SRR1000002', 'SRR1000001']

    def test_only_pattern_matches(self, runinfo_path):
        accessions = parse_runinfo(runinfo_path.read_text())

        assert all(acc.startswith('SRR') for acc in accessions)
        assert 'ERR2000001' not in accessions
        assert 'Run' not in accessions

    def test_custom_pattern(self, runinfo_path):
        accessions = parse_runinfo(runinfo_path.read_text(), pattern=r'^(SRR|ERR)')

        assert 'ERR2000001' in accessions
        assert len(accessions) == 5

    def test_empty_text(self):
        assert parse_runinfo('') == []
        assert parse_runinfo('\n\n') == []

    def test_header_only(self):
        assert parse_runinfo('Run,ReleaseDate,LoadDate\n') == []

    def test_single_column(self):
        text = 'Run\nSRR1\nSRR2\n'
        assert parse_runinfo(text) == ['SRR1', 'SRR2']

    def test_unbalanced_quote_in_later_field(self):
        text = 'Run,LibraryName,X\nSRR1,"lib 3,a\nSRR2,b,c\nSRR3,d,e\n'

        assert parse_runinfo(text) == ['SRR1', 'SRR2', 'SRR3']


class TestAccessionFile:
    """Reading and writing run_accessions.txt."""

    def test_write_then_read(self, temp_dir):
        path = temp_dir / 'proj' / 'run_accessions.txt'

        write_accessions(path, ['SRR1', 'SRR2', 'SRR1'])

        assert path.read_text() == 'SRR1\nSRR2\nSRR1\n'
        assert read_accessions(path) == ['SRR1', 'SRR2', 'SRR1']

    def test_write_overwrites(self, temp_dir):
        path = temp_dir / 'run_accessions.txt'
        write_accessions(path, ['SRR1', 'SRR2'])

        write_accessions(path, ['SRR9'])

        assert read_accessions(path) == ['SRR9']

    def test_read_skips_blank_lines(self, temp_dir):
        path = temp_dir / 'run_accessions.txt'
        path.write_text('SRR1\n\n  SRR2  \n')

        assert read_accessions(path) == ['SRR1', 'SRR2']

    def test_read_missing_file(self, temp_dir):
        with pytest.raises(NoAccessionsError):
            read_accessions(temp_dir / 'run_accessions.txt')
