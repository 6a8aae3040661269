import datetime as dt

import pytest

from tsdata.core import (
    ColumnCountMismatch,
    ColumnValidationError,
    InvalidTimestamp,
    LineError,
    Metadata,
    MonotonicTimePolicy,
    NonMonotonicTimestamp,
    Record,
    TooFewColumns,
    validate_line,
)

TS = "2017-05-06T19:52:57.601Z"
TS_VALUE = dt.datetime(2017, 5, 6, 19, 52, 57, 601000, tzinfo=dt.timezone.utc)


@pytest.fixture
def meta():
    return Metadata(
        file_type="fileType",
        project="project",
        file_description="Some general comments about this file on a single line, not tab-delimited",
        comments=["ISO8601 timestamp", "column2 notes", "NA", "column4 notes", "column5 notes", "column6 notes"],
        types=["time", "float", "integer", "text", "category", "boolean"],
        units=["NA", "m/s", "km", "NA", "NA", "NA"],
        headers=["time", "speed", "distance", "notes", "color", "hasTail"],
    )


@pytest.fixture
def two_col():
    return Metadata(
        file_type="ft",
        project="p",
        types=["time", "float"],
        units=["NA", "NA"],
        headers=["time", "col1"],
    )


def line(*fields: str) -> str:
    return "\t".join(fields)


class TestValidLines:
    @pytest.mark.parametrize(
        "fields",
        [
            (TS, "6.0", "100", "foo", "blue", "TRUE"),
            (TS, "6.0", "100", "foo", "blue", "FALSE"),
            (TS, "6.0", "100", "foo", "blue", "NA"),
            (TS, "NA", "100", "foo", "blue", "TRUE"),
            (TS, "6.0", "NA", "foo", "blue", "TRUE"),
            (TS, "6.0", "100", "", "blue", "TRUE"),
        ],
    )
    def test_fields_are_returned(self, meta, fields):
        rec = validate_line(meta, line(*fields))
        assert rec.fields == fields
        assert rec.time == TS_VALUE

    def test_two_column_example(self, two_col):
        rec = validate_line(two_col, f"{TS}\t6.0")
        assert rec == Record(fields=[TS, "6.0"], time=TS_VALUE)
        assert rec.line() == f"{TS}\t6.0"

    def test_na_float(self, two_col):
        rec = validate_line(two_col, f"{TS}\tNA")
        assert rec.fields == (TS, "NA")

    def test_fields_are_trimmed_and_time_is_not_reformatted(self, two_col):
        ts = "2017-05-06 19:52:57+02:00"
        rec = validate_line(two_col, f"  {ts} \t 6.0 \r")
        assert rec.fields == (ts, "6.0")
        assert rec.time.utcoffset() == dt.timedelta(hours=2)

    def test_non_monotonic_timestamps_are_allowed_by_default(self, two_col):
        validate_line(two_col, "2020-01-02T00:00:00Z\t1")
        validate_line(two_col, "2020-01-01T00:00:00Z\t1")

    def test_idempotent(self, meta):
        text = line(TS, "6.0", "100", "foo", "blue", "TRUE")
        assert validate_line(meta, text) == validate_line(meta, text)


class TestInvalidLines:
    def test_na_timestamp(self, two_col):
        with pytest.raises(InvalidTimestamp) as exc:
            validate_line(two_col, "NA\t6.0")
        assert exc.value.value == "NA"

    def test_na_timestamp_even_when_lenient(self, two_col):
        with pytest.raises(InvalidTimestamp):
            validate_line(two_col, "NA\t6.0", strict=False)

    @pytest.mark.parametrize(
        "text, error",
        [
            ("", TooFewColumns),
            ("just one field", TooFewColumns),
            (line(TS, "6.0", "100", "foo"), ColumnCountMismatch),
            (line(TS, "6.0", "100", "foo", "blue", "TRUE", "extra"), ColumnCountMismatch),
            (line("", "6.0", "100", "foo", "blue", "TRUE"), InvalidTimestamp),
            (line("2017-05-06aT19:52:57.601Z", "6.0", "100", "foo", "blue", "TRUE"), InvalidTimestamp),
            (line("2017-05-06aT19:52:57.601Z", "6.0", "100", "foo", "blue", "TaRUE"), InvalidTimestamp),
            (line(TS, "6.0", "100", "foo", "blue", ""), ColumnValidationError),
            (line(TS, "", "100", "foo", "blue", "TRUE"), ColumnValidationError),
            (line(TS, "6.0", "", "foo", "blue", "TRUE"), ColumnValidationError),
            (line(TS, "6a.0", "100", "foo", "blue", "TRUE"), ColumnValidationError),
            (line(TS, "6.0", "100.3", "foo", "blue", "TRUE"), ColumnValidationError),
            (line(TS, "6.0", "100", "foo", "blue", "TaRUE"), ColumnValidationError),
            (line(TS, "6.0", "100", "foo", "", "TRUE"), ColumnValidationError),
        ],
    )
    def test_errors(self, meta, text, error):
        with pytest.raises(error):
            validate_line(meta, text)

    def test_column_count_mismatch_details(self, meta):
        with pytest.raises(ColumnCountMismatch) as exc:
            validate_line(meta, line(TS, "6.0", "100", "foo"))
        assert (exc.value.expected, exc.value.found) == (6, 4)
        assert str(exc.value) == "found 4 columns, expected 6"

    def test_strict_reports_first_bad_column(self, meta):
        with pytest.raises(ColumnValidationError) as exc:
            validate_line(meta, line(TS, "x", "1.5", "foo", "blue", "TRUE"))
        assert exc.value.column == 2
        assert exc.value.value == "x"
        assert exc.value.failures == ((2, "x"),)
        assert str(exc.value) == "column 2, bad value 'x'"

    def test_lenient_reports_every_bad_column(self, meta):
        with pytest.raises(ColumnValidationError) as exc:
            validate_line(meta, line(TS, "x", "1.5", "foo", "", "maybe"), strict=False)
        assert exc.value.column == 2
        assert exc.value.failures == ((2, "x"), (3, "1.5"), (5, ""), (6, "maybe"))

    def test_line_errors_share_a_base(self, meta):
        with pytest.raises(LineError):
            validate_line(meta, "")

    def test_same_error_twice(self, meta):
        text = line(TS, "6.0", "100", "foo", "blue", "TaRUE")
        errors = []
        for _ in range(2):
            with pytest.raises(ColumnValidationError) as exc:
                validate_line(meta, text)
            errors.append((type(exc.value), exc.value.column))
        assert errors[0] == errors[1]

    def test_unvalidated_metadata_with_missing_types(self):
        short = Metadata(file_type="ft", project="p", types=["time"], headers=["time", "x"])
        with pytest.raises(ColumnValidationError) as exc:
            validate_line(short, line(TS, "1"))
        assert exc.value.column == 2

    def test_undecodable_byte_is_escaped_in_message(self, two_col):
        with pytest.raises(ColumnValidationError) as exc:
            validate_line(two_col, line(TS, "\udcff"))
        assert "bad value '\\xff'" in str(exc.value)


class TestMonotonicTimePolicy:
    def test_rejects_going_back_in_time(self, two_col):
        policy = MonotonicTimePolicy()
        validate_line(two_col, "2020-01-01T00:00:00Z\t1", policy=policy)
        validate_line(two_col, "2020-01-01T00:00:00Z\t1", policy=policy)
        with pytest.raises(NonMonotonicTimestamp) as exc:
            validate_line(two_col, "2019-12-31T23:59:59Z\t1", policy=policy)
        assert exc.value.previous == dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc)

    def test_compares_across_offsets(self, two_col):
        policy = MonotonicTimePolicy()
        validate_line(two_col, "2020-01-01T12:00:00+02:00\t1", policy=policy)
        # 11:00Z is after 10:00Z
        validate_line(two_col, "2020-01-01T11:00:00Z\t1", policy=policy)

    def test_strictly_rejects_repeats(self, two_col):
        policy = MonotonicTimePolicy(strictly=True)
        validate_line(two_col, "2020-01-01T00:00:00Z\t1", policy=policy)
        with pytest.raises(NonMonotonicTimestamp):
            validate_line(two_col, "2020-01-01T00:00:00Z\t1", policy=policy)

    def test_failed_line_does_not_advance_policy(self, two_col):
        policy = MonotonicTimePolicy()
        with pytest.raises(ColumnValidationError):
            validate_line(two_col, "2030-01-01T00:00:00Z\tbad", policy=policy)
        assert policy.last is None
        validate_line(two_col, "2020-01-01T00:00:00Z\t1", policy=policy)

    def test_reset(self):
        policy = MonotonicTimePolicy()
        policy.check(dt.datetime(2020, 1, 2, tzinfo=dt.timezone.utc))
        policy.reset()
        policy.check(dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc))
