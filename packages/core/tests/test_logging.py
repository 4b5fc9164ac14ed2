"""Tests for structured logging."""

from decimal import Decimal

import pytest
import structlog
from structlog.testing import capture_logs

from deductly_core.config import EngineSettings
from deductly_core.home_office import calculate_form_8829
from deductly_core.logging import configure_logging, get_logger
from deductly_core.models import AuditTrail


@pytest.fixture(autouse=True)
def reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_json_outside_development(self):
        configure_logging(EngineSettings(_env_file=None, env="production"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_in_development(self):
        configure_logging(EngineSettings(_env_file=None, env="development"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_get_logger(self):
        configure_logging(EngineSettings(_env_file=None, env="test"))

        assert get_logger("deductly") is not None


class TestCalculationLogging:
    """Calculators log every audit step."""

    def test_audit_trail_logs_each_step(self):
        with capture_logs() as logs:
            trail = AuditTrail("form_8829_calculation_step", tax_year=2024)
            trail.log_step(
                step="business_use_percent",
                input_value="200 / 2000",
                output_value="10",
                source="Form 8829 Part I",
            )

        assert logs == [
            {
                "event": "form_8829_calculation_step",
                "log_level": "info",
                "tax_year": 2024,
                "step": "business_use_percent",
                "input": "200 / 2000",
                "output": "10",
                "source": "Form 8829 Part I",
            }
        ]
        assert trail.steps() == ["business_use_percent"]

    def test_calculator_emits_step_events(self):
        settings = {
            "totalHomeSqFt": 2000,
            "officeSqFt": 200,
            "rentOrMortgageInterest": Decimal("12000"),
        }
        with capture_logs() as logs:
            result = calculate_form_8829(settings, tax_year=2024)

        events = [entry for entry in logs if entry["event"] == "form_8829_calculation_step"]
        assert [entry["step"] for entry in events] == [e.step for e in result.audit_log]
