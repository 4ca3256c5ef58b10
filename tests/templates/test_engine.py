"""
Tests for command templates.

Covers parameter presence, type coercion, constraint rules and placeholder
substitution.
"""

import pytest

from lightcmd.core.result import ErrorCategory, ErrorCode
from lightcmd.exceptions import TemplateError
from lightcmd.templates.engine import CommandTemplate, ParamType
from lightcmd.validation.parameters import ParameterConstraints, ParameterKind


@pytest.fixture
def intensity_template():
    return CommandTemplate(
        "Fixture {fixtures} At {intensity}",
        {"fixtures": ParamType.TEXT, "intensity": ParamType.NUMBER},
        {"intensity": ParameterConstraints(min=0, max=100)},
        name="fixture_intensity",
    )


class TestGenerate:
    """Tests for successful generation."""

    def test_substitutes_placeholders(self, intensity_template):
        """Test every placeholder is replaced."""
        result = intensity_template.generate({"fixtures": "1 Thru 10", "intensity": 75})
        assert result.unwrap() == "Fixture 1 Thru 10 At 75"

    def test_numeric_text_is_coerced(self, intensity_template):
        """Test numeric text satisfies a number parameter."""
        result = intensity_template.generate({"fixtures": "1", "intensity": "50.5"})
        assert result.unwrap() == "Fixture 1 At 50.5"

    def test_integral_float_renders_without_fraction(self, intensity_template):
        """Test 75.0 renders as 75."""
        result = intensity_template.generate({"fixtures": "1", "intensity": 75.0})
        assert result.unwrap() == "Fixture 1 At 75"

    def test_text_accepts_numbers(self, intensity_template):
        """Test a number given for a text parameter is rendered."""
        result = intensity_template.generate({"fixtures": 5, "intensity": 10})
        assert result.unwrap() == "Fixture 5 At 10"

    def test_repeated_placeholder(self):
        """Test a placeholder used twice is replaced everywhere."""
        template = CommandTemplate("Copy Cue {cue} At Cue {cue}", {"cue": "string"})
        assert template.generate({"cue": "3"}).unwrap() == "Copy Cue 3 At Cue 3"
        assert template.placeholders == ("cue",)

    def test_boolean_parameter(self):
        """Test booleans render lowercase."""
        template = CommandTemplate("Sequence 1 Loop {loop}", {"loop": ParamType.BOOLEAN})
        assert template.generate({"loop": True}).unwrap() == "Sequence 1 Loop true"

    def test_undeclared_values_are_substituted(self):
        """Test values for undeclared placeholders are used as given."""
        template = CommandTemplate("Go Cue {cue}")
        assert template.generate({"cue": 4}).unwrap() == "Go Cue 4"

    def test_rules_as_dicts(self):
        """Test rules may be written as plain dictionaries."""
        template = CommandTemplate(
            "Fixture 1 At {level}", {"level": "number"}, {"level": {"max": 50}}
        )
        assert template.generate({"level": 60}).error.code is ErrorCode.OUT_OF_RANGE


class TestGenerateFailures:
    """Tests for each generation failure."""

    def test_out_of_range(self, intensity_template):
        """Test a value above the rule's max is rejected, not clamped."""
        result = intensity_template.generate({"fixtures": "1", "intensity": 150})
        assert result.is_err
        assert result.error.code is ErrorCode.OUT_OF_RANGE
        assert result.error.message == "Parameter 'intensity' must be at most 100"

    def test_missing_parameter(self, intensity_template):
        """Test a declared parameter without a value fails."""
        result = intensity_template.generate({"fixtures": "1"})
        assert result.error.code is ErrorCode.MISSING_PARAMETER
        assert result.error.message == "Missing required parameter: intensity"
        assert result.error.category is ErrorCategory.TEMPLATE

    def test_type_mismatch(self, intensity_template):
        """Test non-numeric text for a number parameter fails."""
        result = intensity_template.generate({"fixtures": "1", "intensity": "full"})
        assert result.error.code is ErrorCode.TYPE_MISMATCH
        assert "must be a number" in result.error.message

    def test_bool_is_not_a_number(self, intensity_template):
        """Test booleans do not satisfy number parameters."""
        result = intensity_template.generate({"fixtures": "1", "intensity": True})
        assert result.error.code is ErrorCode.TYPE_MISMATCH

    def test_unresolved_placeholder(self):
        """Test a placeholder with no value fails."""
        template = CommandTemplate("Fixture {fixtures} At {intensity}", {"fixtures": "string"})
        result = template.generate({"fixtures": "1"})
        assert result.error.code is ErrorCode.UNRESOLVED_PLACEHOLDER
        assert "{intensity}" in result.error.message

    def test_rule_requires_declared_parameter(self):
        """Test a rule for an untyped placeholder is refused when the template is built."""
        with pytest.raises(ValueError, match="undeclared parameters: intensity"):
            CommandTemplate(
                "Fixture {fixtures} At {intensity}",
                {"fixtures": ParamType.TEXT},
                {"intensity": ParameterConstraints(min=0, max=100)},
            )

    def test_braces_in_value_are_not_placeholders(self):
        """Test a text value containing braces is substituted as is."""
        template = CommandTemplate("Label Group 1 {name}", {"name": ParamType.TEXT})
        assert template.generate({"name": "{x}"}).unwrap() == "Label Group 1 {x}"

    def test_kind_rule(self):
        """Test a rule with a kind runs that kind's validation."""
        template = CommandTemplate(
            "Fixture 1 Color {color}",
            {"color": ParamType.TEXT},
            {"color": ParameterConstraints(kind=ParameterKind.COLOR)},
        )
        assert template.generate({"color": "Red"}).unwrap() == "Fixture 1 Color Red"
        result = template.generate({"color": "#12"})
        assert result.error.code is ErrorCode.INVALID_COLOR_FORMAT
        assert result.error.message.startswith("Parameter 'color': ")

    def test_unwrap_raises_template_error(self, intensity_template):
        """Test unwrapping a template failure raises TemplateError."""
        result = intensity_template.generate({})
        with pytest.raises(TemplateError) as exc_info:
            result.unwrap()
        assert exc_info.value.template_name == "fixture_intensity"
