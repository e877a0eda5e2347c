"""Tests for activity configuration validation."""
import pytest

from app.domain.validators import REQUIRED_FIELDS, ValidationResult, validate_activity_config

REQUIRED_MESSAGES = {
    "title": "Activity title is required",
    "grade": "Grade is required",
    "modules": "At least one thematic module must be selected",
    "number_of_exercises": "Number of exercises is required",
    "total_time_minutes": "Total time in minutes is required",
    "number_of_retries": "Number of retries is required",
    "exercises": "Exercises are required",
}


def test_valid_config_has_no_errors(valid_config):
    result = validate_activity_config(valid_config)
    assert result.is_valid
    assert result.as_dict() == {}


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_missing_required_field_reports_only_that_field(valid_config, field):
    del valid_config[field]
    result = validate_activity_config(valid_config)
    assert not result.is_valid
    assert result.as_dict() == {field: [REQUIRED_MESSAGES[field]]}


@pytest.mark.parametrize("grade", [9, 13, 0, -10, 10.5, 100])
def test_grade_out_of_range(valid_config, grade):
    valid_config["grade"] = grade
    result = validate_activity_config(valid_config)
    assert result.as_dict() == {"grade": ["Grade must be 10, 11 or 12"]}


@pytest.mark.parametrize("grade", [10, 11, 12])
def test_allowed_grades(valid_config, grade):
    valid_config["grade"] = grade
    assert "grade" not in validate_activity_config(valid_config).as_dict()


@pytest.mark.parametrize("grade", ["12", True, float("nan")])
def test_grade_must_be_a_real_number(valid_config, grade):
    valid_config["grade"] = grade
    assert validate_activity_config(valid_config).as_dict()["grade"] == ["Grade must be a number"]


def test_empty_exercises(valid_config):
    valid_config["exercises"] = []
    result = validate_activity_config(valid_config)
    assert result.as_dict() == {"exercises": ["At least one exercise must be added to the activity"]}


def test_exercises_must_be_a_list(valid_config):
    valid_config["exercises"] = "question 1"
    assert validate_activity_config(valid_config).as_dict()["exercises"] == ["Exercises must be a list"]


def test_title_too_long(valid_config):
    valid_config["title"] = "x" * 201
    assert validate_activity_config(valid_config).as_dict() == {
        "title": ["Activity title cannot exceed 200 characters"]
    }


def test_title_at_limit_is_valid(valid_config):
    valid_config["title"] = "x" * 200
    assert validate_activity_config(valid_config).is_valid


def test_blank_and_too_long_title_reports_both(valid_config):
    valid_config["title"] = " " * 201
    assert validate_activity_config(valid_config).as_dict()["title"] == [
        "Activity title is required",
        "Activity title cannot exceed 200 characters",
    ]


def test_blank_modules(valid_config):
    valid_config["modules"] = "   "
    assert validate_activity_config(valid_config).as_dict() == {
        "modules": ["At least one thematic module must be selected"]
    }


def test_number_of_exercises_rules_reported_independently(valid_config):
    valid_config["number_of_exercises"] = -1.5
    assert validate_activity_config(valid_config).as_dict()["number_of_exercises"] == [
        "Number of exercises must be a whole number",
        "Number of exercises must be greater than 0",
    ]


def test_zero_total_time(valid_config):
    valid_config["total_time_minutes"] = 0
    assert validate_activity_config(valid_config).as_dict() == {
        "total_time_minutes": ["Total time in minutes must be greater than 0"]
    }


def test_fractional_total_time(valid_config):
    valid_config["total_time_minutes"] = 12.5
    assert validate_activity_config(valid_config).as_dict() == {
        "total_time_minutes": ["Total time in minutes must be a whole number of minutes"]
    }


def test_integral_float_counts_as_integer(valid_config):
    valid_config["number_of_exercises"] = 3.0
    assert validate_activity_config(valid_config).is_valid


def test_zero_retries_is_valid(valid_config):
    valid_config["number_of_retries"] = 0
    assert validate_activity_config(valid_config).is_valid


def test_negative_retries(valid_config):
    valid_config["number_of_retries"] = -1
    assert validate_activity_config(valid_config).as_dict() == {
        "number_of_retries": ["Number of retries cannot be negative"]
    }


def test_retries_must_be_numeric(valid_config):
    valid_config["number_of_retries"] = "2"
    assert validate_activity_config(valid_config).as_dict() == {
        "number_of_retries": ["Number of retries must be a number"]
    }


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("relative_tolerance_pct", 101, "Relative tolerance must be between 0 and 100"),
        ("relative_tolerance_pct", -0.1, "Relative tolerance must be between 0 and 100"),
        ("relative_tolerance_pct", "5%", "Relative tolerance must be a number"),
        ("absolute_tolerance", -1, "Absolute tolerance cannot be negative"),
        ("absolute_tolerance", "big", "Absolute tolerance must be a number"),
        ("approval_threshold", 1.5, "Approval threshold must be between 0 and 1 (e.g. 0.5 for 50%)"),
        ("approval_threshold", "half", "Approval threshold must be a number"),
        ("show_answers_after_submission", "yes", "Show answers after submission must be a boolean"),
        ("scoring_policy", "exponential", 'Scoring policy must be "linear" or "non-linear"'),
        ("scoring_policy", "  ", "Scoring policy must be a non-empty string"),
        ("scoring_policy", 3, "Scoring policy must be a non-empty string"),
    ],
)
def test_optional_field_rules(valid_config, field, value, message):
    valid_config[field] = value
    assert validate_activity_config(valid_config).as_dict() == {field: [message]}


def test_optional_fields_accept_valid_values(valid_config):
    valid_config.update(
        relative_tolerance_pct=0,
        absolute_tolerance=0.01,
        show_answers_after_submission=False,
        scoring_policy="non-linear",
        approval_threshold=1,
    )
    assert validate_activity_config(valid_config).is_valid


def test_optional_field_set_to_none_is_absent(valid_config):
    valid_config["scoring_policy"] = None
    valid_config["approval_threshold"] = None
    assert validate_activity_config(valid_config).is_valid


def test_exercise_errors_are_tagged_by_position(valid_config):
    valid_config["exercises"].append(
        {"question": "", "options": [], "correct_options": "A", "correct_answer": "   "}
    )
    valid_config["exercises"].append("not an exercise")
    assert validate_activity_config(valid_config).as_dict() == {
        "exercises": [
            "Exercise 2 must have a question",
            "Exercise 2 must have at least one answer option",
            "Exercise 2 correct_answer must be a non-empty string",
            "Exercise 3 is invalid",
        ]
    }


def test_exercise_missing_fields(valid_config):
    valid_config["exercises"] = [{"options": "A,B"}]
    assert validate_activity_config(valid_config).as_dict()["exercises"] == [
        "Exercise 1 must have a question",
        "Exercise 1 options must be a list",
        "Exercise 1 must define correct_options",
        "Exercise 1 must define correct_answer",
    ]


def test_exercise_options_must_be_text(valid_config):
    valid_config["exercises"][0]["options"] = ["A", 2]
    assert validate_activity_config(valid_config).as_dict() == {
        "exercises": ["Exercise 1 options must be text"]
    }


def test_collects_errors_from_every_field_in_one_pass():
    result = validate_activity_config({"grade": 9, "exercises": []})
    assert not result.is_valid
    assert set(result.as_dict()) == {
        "title",
        "grade",
        "modules",
        "number_of_exercises",
        "total_time_minutes",
        "number_of_retries",
        "exercises",
    }
    assert len(result.all_messages()) == 7


def test_non_mapping_candidate_reports_all_required_fields():
    result = validate_activity_config(["not", "a", "config"])
    assert set(result.as_dict()) == set(REQUIRED_FIELDS)


def test_validation_is_pure(valid_config):
    snapshot = {**valid_config, "exercises": [dict(ex) for ex in valid_config["exercises"]]}
    first = validate_activity_config(valid_config)
    second = validate_activity_config(valid_config)
    assert first == second
    assert valid_config == snapshot


def test_result_errors_are_read_only():
    source = {"grade": ["Grade must be 10, 11 or 12"]}
    result = ValidationResult(source)
    source["grade"].append("extra")
    with pytest.raises(TypeError):
        result.errors["title"] = ["Activity title is required"]
    with pytest.raises(AttributeError):
        result.errors["grade"].append("extra")
    assert result.as_dict() == {"grade": ["Grade must be 10, 11 or 12"]}
    result.as_dict()["grade"].append("extra")
    assert result.all_messages() == ["Grade must be 10, 11 or 12"]
