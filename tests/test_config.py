"""Tests for config module constants."""

from spymaster.config import (
    DEFAULT_LOG_LEVEL,
    FIELDS_PER_RECORD,
    FILE_ENCODING,
    LOG_FORMAT,
    MAX_EQUALIZATION_STEPS,
    OUTPUT_FILENAMES,
)


class TestEqualizationLimits:
    """Test the equalisation step cap."""

    def test_max_steps_is_1000(self):
        assert MAX_EQUALIZATION_STEPS == 1000

    def test_max_steps_is_positive_integer(self):
        assert isinstance(MAX_EQUALIZATION_STEPS, int)
        assert MAX_EQUALIZATION_STEPS > 0


class TestRecordFormat:
    """Test informant file format constants."""

    def test_record_has_three_fields(self):
        """condition, coin1, coin2."""
        assert FIELDS_PER_RECORD == 3

    def test_files_are_utf8(self):
        assert FILE_ENCODING == "utf-8"


class TestOutput:
    """Test CLI output configuration."""

    def test_one_output_file_per_spy(self):
        assert len(OUTPUT_FILENAMES) == 2

    def test_output_filenames_are_distinct(self):
        assert len(set(OUTPUT_FILENAMES)) == len(OUTPUT_FILENAMES)


class TestLogging:
    """Test logging defaults."""

    def test_default_level_is_warning(self):
        assert DEFAULT_LOG_LEVEL == "WARNING"

    def test_log_format_names_the_logger(self):
        assert "%(name)s" in LOG_FORMAT
