from __future__ import annotations

import unittest

from app.domain.import_report import Accepted, IrregularityReason, Rejected
from app.domain.mobile_post import Language
from app.error_codes import ErrorCode
from app.exceptions import (
    InvalidLanguageError,
    InvalidNumericValueError,
    InvalidParameterError,
    InvalidTimeFormatError,
    MissingRequiredFieldError,
)
from app.validators.mobile_post_validator import (
    MobilePostValidator,
    parse_float,
    parse_int,
    time_to_minutes,
    validate_coordinates,
    validate_day_of_week,
    validate_language,
    validate_pagination,
    validate_required_groups,
    validate_time,
)


class TestScalarValidators(unittest.TestCase):
    def test_accepts_boundary_times(self) -> None:
        for value in ("00:00", "09:05", "23:59"):
            self.assertEqual(validate_time(value), value)

    def test_rejects_malformed_times(self) -> None:
        for value in ("24:00", "9:00", "12:60", "12:00:00", "noon", "", None, 930):
            with self.assertRaises(InvalidTimeFormatError):
                validate_time(value, field="openAt")

    def test_time_error_names_the_field(self) -> None:
        with self.assertRaises(InvalidTimeFormatError) as ctx:
            validate_time("25:00", field="openAt")

        self.assertEqual(ctx.exception.code, ErrorCode.INVALID_TIME_FORMAT)
        self.assertEqual(ctx.exception.field, "openAt")
        self.assertIn("openAt", ctx.exception.message)

    def test_time_to_minutes(self) -> None:
        self.assertEqual(time_to_minutes("00:00"), 0)
        self.assertEqual(time_to_minutes("10:30"), 630)
        self.assertEqual(time_to_minutes("23:59"), 1439)

    def test_day_of_week_range(self) -> None:
        self.assertEqual(validate_day_of_week(1), 1)
        self.assertEqual(validate_day_of_week(7), 7)
        for value in (0, 8, -1, True, "3"):
            with self.assertRaises(InvalidParameterError):
                validate_day_of_week(value)

    def test_coordinates_both_absent_is_valid(self) -> None:
        self.assertIsNone(validate_coordinates(None, None))

    def test_coordinates_must_come_in_pairs(self) -> None:
        with self.assertRaises(InvalidParameterError):
            validate_coordinates(22.3, None)
        with self.assertRaises(InvalidParameterError):
            validate_coordinates(None, 114.1)

    def test_coordinates_range_and_finiteness(self) -> None:
        self.assertEqual(validate_coordinates(90, -180), (90.0, -180.0))
        for latitude, longitude in ((90.1, 0.0), (0.0, 180.5), (float("nan"), 0.0), (0.0, float("inf"))):
            with self.assertRaises(InvalidParameterError):
                validate_coordinates(latitude, longitude)

    def test_required_groups(self) -> None:
        validate_required_groups({"name_tc": "流動郵政局", "district_sc": "西贡"})
        with self.assertRaises(MissingRequiredFieldError) as ctx:
            validate_required_groups({"name_en": "  ", "district_en": "Sai Kung"})
        self.assertEqual(ctx.exception.field, "name")

    def test_pagination_bounds(self) -> None:
        window = validate_pagination(3, 20)
        self.assertEqual(window.offset, 40)
        self.assertEqual(validate_pagination(1, 200).limit, 200)
        for page, limit in ((0, 20), (1, 0), (1, 201), (-2, 10)):
            with self.assertRaises(InvalidParameterError):
                validate_pagination(page, limit)

    def test_language(self) -> None:
        self.assertIs(validate_language("TC"), Language.TC)
        self.assertIs(validate_language(" all "), Language.ALL)
        for value in ("fr", "", "english"):
            with self.assertRaises(InvalidLanguageError):
                validate_language(value)

    def test_numeric_parsing(self) -> None:
        self.assertEqual(parse_int("42", field="seq"), 42)
        self.assertEqual(parse_int("3.0", field="seq"), 3)
        self.assertIsNone(parse_int("  ", field="seq"))
        self.assertEqual(parse_float("22.5", field="latitude"), 22.5)
        for value in ("abc", "1.5"):
            with self.assertRaises(InvalidNumericValueError):
                parse_int(value, field="page")
        with self.assertRaises(InvalidNumericValueError):
            parse_float("north", field="latitude")


class TestPayloadValidation(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MobilePostValidator()

    def test_valid_create_payload_has_no_violations(self) -> None:
        violations = self.validator.validate_payload(
            {
                "name_en": "Mobile Post Office No. 1",
                "district_en": "Sai Kung",
                "open_hour": "09:30",
                "close_hour": "11:00",
                "day_of_week_code": 1,
                "latitude": 22.3,
                "longitude": 114.2,
            },
            partial=False,
        )

        self.assertEqual(violations, [])

    def test_create_requires_name_and_district(self) -> None:
        violations = self.validator.validate_payload({"mobile_code": "MO1"}, partial=False)

        self.assertEqual(len(violations), 1)
        self.assertIs(violations[0].code, ErrorCode.MISSING_REQUIRED_FIELD)
        self.assertEqual(violations[0].field, "name")
        self.assertIn("nameEN", violations[0].message)
        self.assertIn("districtEN", violations[0].message)

    def test_update_skips_required_groups(self) -> None:
        self.assertEqual(self.validator.validate_payload({"seq": 4}, partial=True), [])

    def test_invalid_body_time_is_an_invalid_parameter(self) -> None:
        violations = self.validator.validate_payload({"open_hour": "25:00"}, partial=True)

        self.assertEqual(len(violations), 1)
        self.assertIs(violations[0].code, ErrorCode.INVALID_PARAMETER)
        self.assertIn("valid time", violations[0].message)

    def test_half_a_coordinate_pair_is_rejected(self) -> None:
        violations = self.validator.validate_payload({"latitude": 22.3}, partial=True)

        self.assertEqual([violation.field for violation in violations], ["latitude"])

    def test_clearing_one_coordinate_is_rejected(self) -> None:
        violations = self.validator.validate_payload({"latitude": None}, partial=True)

        self.assertEqual(len(violations), 1)
        self.assertIs(violations[0].code, ErrorCode.INVALID_PARAMETER)
        self.assertIn("together", violations[0].message)

    def test_clearing_both_coordinates_is_allowed(self) -> None:
        self.assertEqual(
            self.validator.validate_payload({"latitude": None, "longitude": None}, partial=True),
            [],
        )

    def test_seq_must_fit_the_column(self) -> None:
        violations = self.validator.validate_payload({"seq": 2**40}, partial=True)

        self.assertEqual([(v.code, v.field) for v in violations], [(ErrorCode.INVALID_NUMERIC_VALUE, "seq")])
        self.assertEqual(self.validator.validate_payload({"seq": 2**31 - 1}, partial=True), [])

    def test_text_longer_than_its_column(self) -> None:
        violations = self.validator.validate_payload(
            {"mobile_code": "M" * 33, "address_en": "x" * 500},
            partial=True,
        )

        self.assertEqual([violation.field for violation in violations], ["mobileCode"])
        self.assertIn("32", violations[0].message)

    def test_collects_every_violation(self) -> None:
        violations = self.validator.validate_payload(
            {"open_hour": "9am", "close_hour": "late", "day_of_week_code": 9},
            partial=True,
        )

        self.assertEqual(
            [violation.field for violation in violations],
            ["openHour", "closeHour", "dayOfWeekCode"],
        )


class TestImportRowValidation(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MobilePostValidator()

    def _row(self, **overrides):
        row = {
            "mobileCode": "MO1",
            "seq": "1",
            "nameEN": " Mobile Post Office No. 1 ",
            "districtEN": "Sai Kung",
            "openHour": "9:30",
            "closeHour": "11:00:00",
            "dayOfWeekCode": "1",
            "latitude": "22.3157",
            "longitude": 114.2644,
        }
        row.update(overrides)
        return row

    def test_accepts_and_normalizes_loose_row(self) -> None:
        outcome = self.validator.validate_import_row(self._row(), 0)

        self.assertIsInstance(outcome, Accepted)
        self.assertEqual(outcome.fields["seq"], 1)
        self.assertEqual(outcome.fields["name_en"], "Mobile Post Office No. 1")
        self.assertEqual(outcome.fields["open_hour"], "09:30")
        self.assertEqual(outcome.fields["close_hour"], "11:00")
        self.assertEqual(outcome.fields["day_of_week_code"], 1)
        self.assertEqual(outcome.fields["latitude"], 22.3157)
        self.assertIsNone(outcome.fields["name_tc"])

    def test_accepts_attribute_names(self) -> None:
        outcome = self.validator.validate_import_row(
            {"name_tc": "流動郵政局", "district_tc": "西貢"},
            3,
        )

        self.assertIsInstance(outcome, Accepted)
        self.assertEqual(outcome.index, 3)

    def test_non_object_row(self) -> None:
        outcome = self.validator.validate_import_row(["MO1", 1], 2)

        self.assertIsInstance(outcome, Rejected)
        self.assertIs(outcome.reason, IrregularityReason.INVALID_ROW)

    def test_rejection_reasons(self) -> None:
        cases = [
            (self._row(seq="first"), IrregularityReason.INVALID_NUMERIC_VALUE),
            (self._row(nameEN=""), IrregularityReason.MISSING_REQUIRED_FIELD),
            (self._row(openHour="25:00"), IrregularityReason.INVALID_TIME_FORMAT),
            (self._row(dayOfWeekCode=8), IrregularityReason.INVALID_DAY_OF_WEEK),
            (self._row(latitude=None), IrregularityReason.INVALID_COORDINATES),
            (self._row(longitude=200), IrregularityReason.INVALID_COORDINATES),
            (self._row(seq=2**40), IrregularityReason.INVALID_NUMERIC_VALUE),
            (self._row(addressEN="x" * 501), IrregularityReason.VALUE_TOO_LONG),
            (self._row(mobileCode="M" * 40), IrregularityReason.VALUE_TOO_LONG),
        ]

        for row, reason in cases:
            outcome = self.validator.validate_import_row(row, 5)
            self.assertIsInstance(outcome, Rejected)
            self.assertIs(outcome.reason, reason)
            self.assertEqual(outcome.index, 5)

    def test_numeric_failure_lists_the_fields(self) -> None:
        outcome = self.validator.validate_import_row(self._row(seq="x", latitude="north"), 0)

        self.assertEqual(outcome.fields, ("seq", "latitude"))


if __name__ == "__main__":
    unittest.main()
