# smart_attendance/app/tests/unit/test_field_rules.py

import pytest

from smart_attendance.app.services.data_validation import (
    CustomRuleOutcome,
    ErrorCode,
    RuleKind,
    Severity,
    STUDENT_RULES,
    TEACHER_RULES,
    evaluate_field,
)
from smart_attendance.app.services.data_validation.field_rules import (
    evaluate_rules,
    is_missing,
)
from smart_attendance.app.services.data_validation.rule_catalogs import custom


def rule_for(field, kind, rules=STUDENT_RULES):
    return next(r for r in rules if r.field == field and r.kind is kind)


def run(rule, value, snapshot, options, record=None):
    record = record if record is not None else {rule.field: value}
    corrected = dict(record)
    findings = evaluate_field(rule, value, record, corrected, snapshot, options)
    return findings, corrected


class TestRequiredRule:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_values(self, value, reference_snapshot, options):
        findings, _ = run(rule_for("name", RuleKind.required), value, reference_snapshot, options)
        assert [e.code for e in findings.errors] == [ErrorCode.REQUIRED_FIELD_MISSING]
        assert findings.errors[0].message == "Student name is required"

    def test_zero_is_present(self, reference_snapshot, options):
        findings, _ = run(rule_for("roll_number", RuleKind.required), 0, reference_snapshot, options)
        assert findings.is_valid

    def test_is_missing(self):
        assert is_missing(None)
        assert is_missing(" ")
        assert not is_missing(0)
        assert not is_missing("x")


class TestFormatRule:
    def test_mismatch_with_suggestion_and_correction(self, reference_snapshot, options):
        rule = rule_for("contact_number", RuleKind.format)
        findings, corrected = run(rule, "98765-43210", reference_snapshot, options)

        assert len(findings.errors) == 1
        error = findings.errors[0]
        assert error.code == ErrorCode.INVALID_FORMAT
        assert error.suggestions == ["+9876543210"]

        assert [s.code for s in findings.suggestions] == [ErrorCode.AUTO_CORRECTION]
        assert findings.suggestions[0].severity is Severity.info
        assert findings.suggestions[0].message == "Auto-corrected to: +9876543210"
        assert corrected["contact_number"] == "+9876543210"

    def test_mismatch_without_suggestion(self, reference_snapshot, options):
        # too short after cleaning for a suggestion, still normalised
        rule = rule_for("roll_number", RuleKind.format)
        findings, corrected = run(rule, "ab-1", reference_snapshot, options)
        assert findings.errors[0].suggestions == []
        assert corrected["roll_number"] == "AB1"

    def test_suggestion_without_correction(self, reference_snapshot, options):
        rule = rule_for("contact_number", RuleKind.format)
        findings, corrected = run(rule, "123-456", reference_snapshot, options)
        assert findings.errors[0].code == ErrorCode.INVALID_FORMAT
        assert findings.suggestions == []
        assert corrected["contact_number"] == "123-456"

    def test_matching_value_is_left_alone(self, reference_snapshot, options):
        rule = rule_for("contact_number", RuleKind.format)
        findings, corrected = run(rule, "9876543210", reference_snapshot, options)
        assert findings.is_valid
        assert findings.suggestions == []
        assert corrected["contact_number"] == "9876543210"

    def test_matching_name_is_normalised(self, reference_snapshot, options):
        rule = rule_for("name", RuleKind.format)
        findings, corrected = run(rule, "john smith", reference_snapshot, options)
        assert findings.is_valid
        assert corrected["name"] == "John Smith"
        assert findings.suggestions[0].value == "John Smith"

    def test_absent_value_is_skipped(self, reference_snapshot, options):
        rule = rule_for("parent_contact", RuleKind.format)
        findings, corrected = run(rule, None, reference_snapshot, options, record={})
        assert findings.is_valid
        assert corrected == {}

    def test_integer_value(self, reference_snapshot, options):
        rule = rule_for("contact_number", RuleKind.format)
        findings, _ = run(rule, 9876543210, reference_snapshot, options)
        assert findings.is_valid

    def test_non_text_name_is_rejected_without_correction(self, reference_snapshot, options):
        rule = rule_for("name", RuleKind.format)
        findings, corrected = run(rule, 12345, reference_snapshot, options)
        assert findings.errors[0].code == ErrorCode.INVALID_FORMAT
        assert findings.suggestions == []
        assert corrected["name"] == 12345

    def test_employee_id(self, reference_snapshot, options):
        rule = rule_for("employee_id", RuleKind.format, TEACHER_RULES)
        findings, _ = run(rule, "emp-1", reference_snapshot, options)
        assert findings.errors[0].code == ErrorCode.INVALID_FORMAT
        assert findings.suggestions == []


class TestUniqueRule:
    def test_email_compared_case_insensitively(self, reference_snapshot, options):
        findings, _ = run(
            rule_for("email", RuleKind.unique), "TAKEN@University.edu", reference_snapshot, options
        )
        assert [e.code for e in findings.errors] == [ErrorCode.DUPLICATE_VALUE]
        assert findings.errors[0].message == "Email already exists"

    def test_roll_number_compared_upper_cased(self, reference_snapshot, options):
        findings, _ = run(
            rule_for("roll_number", RuleKind.unique), "me2023002", reference_snapshot, options
        )
        assert [e.code for e in findings.errors] == [ErrorCode.DUPLICATE_VALUE]

    def test_new_value(self, reference_snapshot, options):
        findings, _ = run(
            rule_for("email", RuleKind.unique), "new@university.edu", reference_snapshot, options
        )
        assert findings.is_valid


class TestReferenceRule:
    def test_known_department_any_case(self, reference_snapshot, options):
        findings, _ = run(
            rule_for("department", RuleKind.reference), "physics", reference_snapshot, options
        )
        assert findings.is_valid

    def test_unknown_department_gets_fuzzy_suggestions(self, reference_snapshot, options):
        findings, _ = run(
            rule_for("department", RuleKind.reference), "Computer Scince", reference_snapshot, options
        )
        error = findings.errors[0]
        assert error.code == ErrorCode.INVALID_REFERENCE
        assert error.message == "Invalid department name"
        assert error.suggestions == ["Computer Science"]

    def test_unknown_section_without_close_match(self, reference_snapshot, options):
        findings, _ = run(
            rule_for("section", RuleKind.reference), "Evening Batch", reference_snapshot, options
        )
        assert findings.errors[0].code == ErrorCode.INVALID_REFERENCE
        assert findings.errors[0].suggestions == []

    def test_absent_section_is_skipped(self, reference_snapshot, options):
        findings, _ = run(rule_for("section", RuleKind.reference), "", reference_snapshot, options)
        assert findings.is_valid


class TestCustomRule:
    @pytest.mark.parametrize("value", ["3", 3, 3.0, " 8 ", None, ""])
    def test_valid_semesters(self, value, reference_snapshot, options):
        findings, _ = run(rule_for("semester", RuleKind.custom), value, reference_snapshot, options)
        assert findings.is_valid

    @pytest.mark.parametrize(
        "value, suggestions",
        [("9", ["8"]), ("0", ["1"]), (12, ["8"]), ("abc", [])],
    )
    def test_invalid_semesters(self, value, suggestions, reference_snapshot, options):
        findings, _ = run(rule_for("semester", RuleKind.custom), value, reference_snapshot, options)
        error = findings.errors[0]
        assert error.code == ErrorCode.CUSTOM_VALIDATION_FAILED
        assert error.message == "Semester must be between 1-8"
        assert error.suggestions == suggestions

    def test_outcome_can_choose_severity_and_code(self, reference_snapshot, options):
        def prefer_short(value, record):
            return CustomRuleOutcome(
                is_valid=len(str(value)) < 5,
                message="Nickname is long",
                severity=Severity.warning,
                code="LONG_NICKNAME",
            )

        rule = custom("nickname", prefer_short, "Invalid nickname")
        findings, _ = run(rule, "Bartholomew", reference_snapshot, options)
        assert findings.is_valid
        assert [w.code for w in findings.warnings] == ["LONG_NICKNAME"]

    def test_falls_back_to_rule_message(self, reference_snapshot, options):
        rule = custom("nickname", lambda v, r: CustomRuleOutcome(is_valid=False), "Invalid nickname")
        findings, _ = run(rule, "x", reference_snapshot, options)
        assert findings.errors[0].message == "Invalid nickname"


class TestEvaluateRules:
    def test_does_not_mutate_record(self, reference_snapshot, options, messy_student):
        original = dict(messy_student)
        _, corrected = evaluate_rules(STUDENT_RULES, messy_student, reference_snapshot, options)
        assert messy_student == original
        assert corrected is not messy_student

    def test_corrected_copy(self, reference_snapshot, options, messy_student):
        _, corrected = evaluate_rules(STUDENT_RULES, messy_student, reference_snapshot, options)
        assert corrected == {
            "name": "John Smith",
            "roll_number": "CS101",
            "email": "john@x",
            "department": "Computer Scince",
            "semester": "9",
        }

    def test_findings_follow_catalog_order(self, reference_snapshot, options, messy_student):
        findings, _ = evaluate_rules(STUDENT_RULES, messy_student, reference_snapshot, options)
        assert [(e.field, e.code) for e in findings.errors] == [
            ("roll_number", ErrorCode.INVALID_FORMAT),
            ("email", ErrorCode.INVALID_FORMAT),
            ("department", ErrorCode.INVALID_REFERENCE),
            ("semester", ErrorCode.CUSTOM_VALIDATION_FAILED),
        ]
        assert [s.field for s in findings.suggestions] == ["name", "roll_number", "email"]
