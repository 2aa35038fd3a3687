"""Test factories for generating test data."""

from polyfactory import Use
from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from tap_emit.models.result import TestResult
from tap_emit.sources.command.models import SuiteDefinition, SuiteTest


class TestResultFactory(DataclassFactory[TestResult]):
    """Factory for TestResult."""

    __test__ = False
    __model__ = TestResult

    number = Use(DataclassFactory.__random__.randint, 1, 1000)
    ok = True
    error_message = None
    exit_code = None
    output = None


class SuiteTestFactory(ModelFactory[SuiteTest]):
    """Factory for SuiteTest."""

    command = Use(lambda: ["true"])
    cwd = None
    timeout = "30s"
    skip = None
    todo = None


class SuiteDefinitionFactory(ModelFactory[SuiteDefinition]):
    """Factory for SuiteDefinition."""

    version = "1.0"
    tests = Use(SuiteTestFactory.batch, size=2)
