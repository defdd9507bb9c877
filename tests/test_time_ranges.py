"""
Unit tests for epoch conversion and the ap.dat / ig_rz.dat time ranges.
"""

import pytest


class TestEpochs:
    """Test MJD <-> calendar conversions."""

    def test_j2000_julian_day(self):
        from iono_correction.ionosphere.epochs import julian_day, modified_julian_date

        assert julian_day(2000, 1, 1, 12) == 2451545.0
        assert modified_julian_date(2000, 1, 1) == 51544.0

    def test_calendar_fields(self):
        from iono_correction.ionosphere.epochs import calendar_fields

        year, mmdd, hours = calendar_fields(51544.5)
        assert year == 2000
        assert mmdd == 101
        assert hours == pytest.approx(12.0)

    def test_calendar_fields_inverts_modified_julian_date(self):
        from iono_correction.ionosphere.epochs import calendar_fields, modified_julian_date

        year, mmdd, hours = calendar_fields(modified_julian_date(2023, 6, 30, 18, 45))
        assert (year, mmdd) == (2023, 630)
        assert hours == pytest.approx(18.75, abs=1e-6)

    def test_format_yyyymmdd(self):
        from iono_correction.ionosphere.epochs import format_yyyymmdd

        assert format_yyyymmdd(20240315) == "3/15/2024"
        assert format_yyyymmdd(19580101) == "1/1/1958"


class TestApRange:
    """Test the short-period index file window."""

    def test_year_pivot(self):
        from iono_correction.ionosphere.time_ranges import normalize_ap_year

        assert normalize_ap_year(58) == 1958
        assert normalize_ap_year(99) == 1999
        assert normalize_ap_year(0) == 2000
        assert normalize_ap_year(57) == 2057
        assert normalize_ap_year(68) == 1968
        assert normalize_ap_year(69) == 1969

    def test_first_and_last_rows_define_window(self, data_dir):
        from iono_correction.ionosphere.time_ranges import read_ap_range

        time_range = read_ap_range(data_dir / 'IonosphereData' / 'ap.dat')

        assert time_range.min_date == 19580101
        assert time_range.max_date == 20241231

    def test_window_is_half_open(self, data_dir):
        from iono_correction.ionosphere.time_ranges import read_ap_range

        time_range = read_ap_range(data_dir / 'IonosphereData' / 'ap.dat')

        assert time_range.contains(19580101)
        assert time_range.contains(20241230)
        assert not time_range.contains(20241231)
        assert not time_range.contains(19571231)

    def test_missing_file(self, tmp_path):
        from iono_correction.exceptions import DataFileMissing
        from iono_correction.ionosphere.time_ranges import read_ap_range

        with pytest.raises(DataFileMissing):
            read_ap_range(tmp_path / 'ap.dat')

    def test_single_day_is_invalid(self, tmp_path):
        from iono_correction.exceptions import InvalidTimeRange
        from iono_correction.ionosphere.time_ranges import read_ap_range

        path = tmp_path / 'ap.dat'
        path.write_text("20  1  1  5 5 5\n20  1  1  5 5 5\n")

        with pytest.raises(InvalidTimeRange):
            read_ap_range(path)

    def test_undecodable_file_is_invalid(self, tmp_path):
        from iono_correction.exceptions import InvalidTimeRange
        from iono_correction.ionosphere.time_ranges import read_ap_range

        path = tmp_path / 'ap.dat'
        path.write_bytes(b"\xff\xfe\n")

        with pytest.raises(InvalidTimeRange):
            read_ap_range(path)

    def test_empty_file_is_invalid(self, tmp_path):
        from iono_correction.exceptions import InvalidTimeRange
        from iono_correction.ionosphere.time_ranges import read_ap_range

        path = tmp_path / 'ap.dat'
        path.write_text("\n\n")

        with pytest.raises(InvalidTimeRange):
            read_ap_range(path)


class TestIgRzRange:
    """Test the long-period index file window."""

    def test_month_window(self, data_dir):
        from iono_correction.ionosphere.time_ranges import read_igrz_range

        time_range = read_igrz_range(data_dir / 'IonosphereData' / 'ig_rz.dat')

        assert time_range.min_date == 19580101
        assert time_range.max_date == 20221231

    def test_last_day_follows_leap_rule(self, tmp_path):
        from iono_correction.ionosphere.time_ranges import read_igrz_range

        path = tmp_path / 'ig_rz.dat'
        path.write_text("Jan 1, 2024\n3,2000,2,2024\n")

        time_range = read_igrz_range(path)

        assert time_range.min_date == 20000301
        assert time_range.max_date == 20240229

    def test_last_day_of_month(self):
        from iono_correction.ionosphere.time_ranges import last_day_of_month

        assert last_day_of_month(2023, 2) == 28
        assert last_day_of_month(2000, 2) == 29
        assert last_day_of_month(1900, 2) == 28
        assert last_day_of_month(2022, 4) == 30

    def test_reversed_range_is_invalid(self, tmp_path):
        from iono_correction.exceptions import InvalidTimeRange
        from iono_correction.ionosphere.time_ranges import read_igrz_range

        path = tmp_path / 'ig_rz.dat'
        path.write_text("Jan 1, 2024\n1,2020,12,2019\n")

        with pytest.raises(InvalidTimeRange):
            read_igrz_range(path)

    def test_missing_range_line(self, tmp_path):
        from iono_correction.exceptions import InvalidTimeRange
        from iono_correction.ionosphere.time_ranges import read_igrz_range

        path = tmp_path / 'ig_rz.dat'
        path.write_text("Jan 1, 2024\n")

        with pytest.raises(InvalidTimeRange):
            read_igrz_range(path)


class TestTimeRangeValidator:
    """Test lazy loading of both windows."""

    def test_paths_under_ionosphere_data(self, data_dir):
        from iono_correction.ionosphere.time_ranges import TimeRangeValidator

        validator = TimeRangeValidator(data_dir)

        assert validator.ap_path == data_dir / 'IonosphereData' / 'ap.dat'
        assert validator.igrz_path == data_dir / 'IonosphereData' / 'ig_rz.dat'
        assert not validator.is_initialized

    def test_initialize_is_idempotent(self, data_dir):
        from iono_correction.ionosphere.time_ranges import TimeRangeValidator

        validator = TimeRangeValidator(data_dir)
        validator.initialize_time_ranges()
        first = validator.ap_range

        # Files are read once; replacing them has no effect
        (data_dir / 'IonosphereData' / 'ap.dat').unlink()
        validator.initialize_time_ranges()

        assert validator.is_initialized
        assert validator.ap_range is first

    def test_missing_directory(self, tmp_path):
        from iono_correction.exceptions import DataFileMissing
        from iono_correction.ionosphere.time_ranges import TimeRangeValidator

        validator = TimeRangeValidator(tmp_path)

        with pytest.raises(DataFileMissing):
            validator.initialize_time_ranges()
        assert not validator.is_initialized
