"""
Unit tests for the TRK-2-23 empirical correction model.
"""

import math

import pytest
from scipy.constants import c

START = "23 03 14 00 00"
END = "23 03 15 00 00"


def record_row(model_type, coefficients, facility="DSN(C10)", spacecraft="SCID(99)",
               signal_type="RANGE", record_type="CHPART", start=START, end=END):
    return [signal_type, model_type, coefficients, record_type, start, end, facility, spacecraft]


def make_model(*rows):
    from iono_correction.ionosphere.empirical_model import TRK223Model
    from iono_correction.ionosphere.records import CorrectionTable
    return TRK223Model(CorrectionTable.from_rows(rows))


def epoch(*args):
    from iono_correction.ionosphere.epochs import modified_julian_date
    return modified_julian_date(*args)


class TestStationKeys:
    """Test ground-station and spacecraft key normalization."""

    def test_numeric_stations(self):
        from iono_correction.ionosphere.empirical_model import normalize_station

        assert normalize_station("14") == ("DSN(014)", "DSN(C10)")
        assert normalize_station("43") == ("DSN(043)", "DSN(C40)")
        assert normalize_station("63") == ("DSN(063)", "DSN(C60)")
        assert normalize_station("5") == ("DSN(05)", "DSN(C10)")

    def test_complex_boundaries(self):
        from iono_correction.ionosphere.empirical_model import complex_for_station

        assert complex_for_station(29) == "DSN(C10)"
        assert complex_for_station(30) == "DSN(C40)"
        assert complex_for_station(49) == "DSN(C40)"
        assert complex_for_station(50) == "DSN(C60)"

    def test_three_character_id_kept(self):
        from iono_correction.ionosphere.empirical_model import normalize_station

        assert normalize_station("C43") == ("DSN(C43)", "DSN(C40)")

    def test_abbreviations_name_a_complex(self):
        from iono_correction.ionosphere.empirical_model import normalize_station

        assert normalize_station("GDS") == ("DSN(C10)", "DSN(C10)")
        assert normalize_station("CAN") == ("DSN(C40)", "DSN(C40)")
        assert normalize_station("MAD") == ("DSN(C60)", "DSN(C60)")

    def test_unknown_station(self):
        from iono_correction.exceptions import RecordNotFound
        from iono_correction.ionosphere.empirical_model import normalize_station

        with pytest.raises(RecordNotFound):
            normalize_station("XYZ")

    def test_spacecraft_key_strips_blanks(self):
        from iono_correction.ionosphere.empirical_model import spacecraft_key

        assert spacecraft_key(" 9 9") == "SCID(99)"
        assert spacecraft_key(99) == "SCID(99)"


class TestMathModels:
    """Test CONST, TRIG and NRMPOW evaluation."""

    def test_trig_at_start(self):
        from iono_correction.ionosphere.empirical_model import evaluate_trig

        assert evaluate_trig((86400.0, 1.0, 0.5, 0.25), 0.0) == pytest.approx(1.5)

    def test_trig_quarter_period(self):
        from iono_correction.ionosphere.empirical_model import evaluate_trig

        assert evaluate_trig((86400.0, 1.0, 0.5, 0.25), 21600.0) == pytest.approx(1.25)

    def test_trig_second_harmonic(self):
        from iono_correction.ionosphere.empirical_model import evaluate_trig

        value = evaluate_trig((86400.0, 0.0, 0.0, 0.0, 2.0, 0.0), 21600.0)

        assert value == pytest.approx(2.0 * math.cos(math.pi))

    def test_trig_drops_unpaired_coefficient(self):
        from iono_correction.ionosphere.empirical_model import evaluate_trig

        assert evaluate_trig((86400.0, 1.0, 0.5, 0.25, 9.0), 0.0) == pytest.approx(1.5)

    def test_nrmpow_endpoints(self):
        from iono_correction.ionosphere.empirical_model import evaluate_nrmpow

        coefficients = (0.45, -0.12, 0.03)

        assert evaluate_nrmpow(coefficients, -1.0) == pytest.approx(0.45 + 0.12 + 0.03)
        assert evaluate_nrmpow(coefficients, 0.0) == pytest.approx(0.45)
        assert evaluate_nrmpow(coefficients, 1.0) == pytest.approx(0.45 - 0.12 + 0.03)

    def test_nrmpow_record_over_window(self):
        from iono_correction.ionosphere.empirical_model import evaluate_record
        from iono_correction.ionosphere.records import CorrectionRecord

        record = CorrectionRecord.from_fields(record_row("NRMPOW", "(0.45, -0.12, 0.03)"))

        assert evaluate_record(record, record.valid_start) == pytest.approx(0.60)
        assert evaluate_record(record, epoch(2023, 3, 14, 12)) == pytest.approx(0.45)
        assert evaluate_record(record, record.valid_end) == pytest.approx(0.36)

    def test_const_is_epoch_independent(self):
        from iono_correction.ionosphere.empirical_model import evaluate_record
        from iono_correction.ionosphere.records import CorrectionRecord

        record = CorrectionRecord.from_fields(record_row("CONST", "(2.5)"))

        assert evaluate_record(record, record.valid_start) == 2.5
        assert evaluate_record(record, epoch(2023, 3, 14, 17, 3)) == 2.5

    def test_unsupported_model(self):
        from iono_correction.exceptions import UnsupportedModel
        from iono_correction.ionosphere.empirical_model import evaluate_record
        from iono_correction.ionosphere.records import CorrectionRecord

        record = CorrectionRecord.from_fields(record_row("SPLINE", "(1.0, 2.0)"))

        with pytest.raises(UnsupportedModel, match="SPLINE"):
            evaluate_record(record, record.valid_start)


class TestTRK223Correction:
    """Test record lookup and the (range, angle, time) triple."""

    def test_const_record_at_reference_frequency(self, context_factory):
        model = make_model(record_row("CONST", "(1.5)"))
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                  spacecraft_id="99")

        drho, dphi, dtime = model.compute_correction(context)

        assert drho == pytest.approx(1.5)
        assert dphi == 0.0
        assert dtime == pytest.approx(1.5 / c)

    def test_frequency_scaling(self, context_factory):
        model = make_model(record_row("CONST", "(1.5)"))
        s_band = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                 spacecraft_id="99")
        doubled = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                  spacecraft_id="99", wavelength=s_band.wavelength / 2.0)

        assert model.compute_correction(doubled).range_correction == pytest.approx(
            model.compute_correction(s_band).range_correction / 4.0
        )

    def test_station_record_is_added(self, context_factory):
        model = make_model(
            record_row("CONST", "(1.0)"),
            record_row("CONST", "(0.5)", facility="DSN(014)"),
            record_row("CONST", "(7.0)", facility="DSN(015)"),
        )
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                  spacecraft_id="99")

        assert model.compute_correction(context).range_correction == pytest.approx(1.5)
        assert model.get_stats()['records_matched'] == 2

    def test_later_record_wins(self, context_factory):
        model = make_model(
            record_row("CONST", "(1.0)"),
            record_row("CONST", "(2.0)", signal_type="DOPRNG"),
        )
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="GDS",
                                  spacecraft_id="99")

        assert model.compute_correction(context).range_correction == pytest.approx(2.0)

    @pytest.mark.parametrize("row", [
        record_row("CONST", "(1.0)", spacecraft="SCID(98)"),
        record_row("CONST", "(1.0)", facility="DSN(C40)"),
        record_row("CONST", "(1.0)", signal_type="DOPPLER"),
        record_row("CONST", "(1.0)", record_type="CHDATA"),
        record_row("CONST", "(1.0)", start="23 03 15 00 01", end="23 03 16 00 00"),
    ])
    def test_record_not_found(self, context_factory, row):
        from iono_correction.exceptions import RecordNotFound

        model = make_model(row)
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                  spacecraft_id="99")

        with pytest.raises(RecordNotFound, match="SCID\\(99\\)"):
            model.compute_correction(context)

    def test_station_record_alone_is_not_enough(self, context_factory):
        from iono_correction.exceptions import RecordNotFound

        model = make_model(record_row("CONST", "(0.5)", facility="DSN(014)"))
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                  spacecraft_id="99")

        with pytest.raises(RecordNotFound):
            model.compute_correction(context)

    def test_unsupported_record_model(self, context_factory):
        from iono_correction.exceptions import UnsupportedModel

        model = make_model(record_row("SPLINE", "(1.0)"))
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="14",
                                  spacecraft_id="99")

        with pytest.raises(UnsupportedModel):
            model.compute_correction(context)

    @pytest.mark.parametrize("row", [
        record_row("TRIG", "(86400)"),
        record_row("TRIG", "(0, 1.0)"),
        record_row("NRMPOW", "(0.45, -0.12)", end=START),
    ])
    def test_unevaluable_records_rejected_on_load(self, row):
        from iono_correction.exceptions import RecordFormatError

        with pytest.raises(RecordFormatError):
            make_model(row)

    def test_loads_record_files_on_first_use(self, tmp_path, context_factory):
        from iono_correction.ionosphere.empirical_model import TRK223Model

        path = tmp_path / 'iono.csv'
        path.write_text(
            f'RANGE, CONST, "(3.0)", CHPART, {START}, {END}, DSN(C60), SCID(99)\n'
        )
        model = TRK223Model(record_files=[path])
        context = context_factory(epoch=epoch(2023, 3, 14, 6), station_id="63",
                                  spacecraft_id="99")

        assert model.table is None
        assert model.compute_correction(context).range_correction == pytest.approx(3.0)
        assert len(model.table) == 1
