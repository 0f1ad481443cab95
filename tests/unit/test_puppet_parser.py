"""
Unit tests for the Puppet manifest parser.
"""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pupdoc.config import RuntimeSettings
from pupdoc.models.parse_result import ParseError, ParseResult
from pupdoc.models.statement import (
    ClassStatement,
    DataTypeAliasStatement,
    DefinedTypeStatement,
    FunctionStatement,
    PlanStatement,
)
from pupdoc.parsers.adapter import AstAdapter
from pupdoc.parsers.parser import ParserState, PuppetParser, grammar_options_for, parse_source


def _parse(source, filename="manifests/init.pp", **kwargs):
    return PuppetParser(source, filename, **kwargs).parse()


class TestScenarios:
    """Test end-to-end parsing of small manifests."""

    def test_simple_class(self, settings, runtime):
        """Test a class with a one-line comment."""
        parser = _parse("# Simple class\nclass klass {\n}\n", settings=settings, runtime=runtime)

        assert parser.error is None
        assert len(parser.statements) == 1
        statement = parser.statements[0]
        assert isinstance(statement, ClassStatement)
        assert statement.name == "klass"
        assert statement.docstring == "Simple class"

    def test_class_without_comment(self, settings, runtime):
        """Test a class with no preceding comment."""
        parser = _parse("class noparams {\n}\n", settings=settings, runtime=runtime)

        assert len(parser.statements) == 1
        assert parser.statements[0].name == "noparams"
        assert parser.statements[0].docstring == ""

    def test_unbalanced_braces(self, settings, runtime, caplog):
        """Test that a syntax error is recorded and logged, not raised."""
        with caplog.at_level(logging.ERROR):
            parser = _parse("class klass {\n  if $x {\n}\n", settings=settings, runtime=runtime)

        assert parser.state == ParserState.FAILED
        assert parser.statements == ()
        assert isinstance(parser.error, ParseError)
        assert parser.error.message
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage().startswith("Failed to parse manifests/init.pp: ")

    def test_plans_file_on_old_runtime(self, settings, old_runtime, fixture_content, caplog):
        """Test that plan files are skipped with a warning on old runtimes."""
        with caplog.at_level(logging.WARNING):
            parser = _parse(fixture_content("plan.pp"), "plans/plann.pp", settings=settings, runtime=old_runtime)

        assert parser.state == ParserState.PARSED
        assert parser.statements == ()
        assert parser.error is None
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Puppet Plans require Puppet 5 or greater" in warnings[0].getMessage()

    def test_plans_file_on_runtime_without_tasks(self, settings, fixture_content, caplog):
        """Test skipping when the old runtime does not know plan syntax at all."""
        runtime = RuntimeSettings(version="4.7.0", supported_settings=[])

        with caplog.at_level(logging.WARNING):
            parser = _parse(fixture_content("plan.pp"), "plans/plann.pp", settings=settings, runtime=runtime)

        assert parser.statements == ()
        assert parser.error is None
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1

    def test_plans_file_with_syntax_error_on_old_runtime(self, settings, old_runtime, caplog):
        """Test that a syntax error in a plans file is reported before the version gate applies."""
        with caplog.at_level(logging.WARNING):
            parser = _parse("plan plann() {\n", "plans/plann.pp", settings=settings, runtime=old_runtime)

        assert parser.state == ParserState.FAILED
        assert parser.statements == ()
        assert parser.error is not None
        assert not [r for r in caplog.records if r.levelno == logging.WARNING]

    def test_plan_outside_plans_directory_on_old_runtime(self, settings, old_runtime, fixture_content):
        """Test that the gate only applies to the plans location."""
        parser = _parse(fixture_content("plan.pp"), "manifests/plann.pp", settings=settings, runtime=old_runtime)

        assert [s.name for s in parser.statements] == ["plann"]


class TestFixtures:
    """Test statements extracted from complete manifests."""

    def test_class_and_defined_type(self, settings, runtime, fixture_content):
        """Test class and defined type statements."""
        parser = _parse(fixture_content("class.pp"), settings=settings, runtime=runtime)

        klass, defined_type = parser.statements
        assert isinstance(klass, ClassStatement)
        assert klass.parent_class == "foo::bar"
        assert klass.docstring.splitlines()[0] == "A simple class."
        assert "@param param3 Third param." in klass.docstring
        assert klass.comments_range == (1, 5)
        assert [p.name for p in klass.parameters] == ["param1", "param2", "param3"]

        assert isinstance(defined_type, DefinedTypeStatement)
        assert defined_type.name == "klass::dt"
        assert defined_type.docstring == "A simple defined type.\n@param param1 First param."

    def test_function(self, settings, runtime, fixture_content):
        """Test function statements."""
        (function,) = _parse(fixture_content("function.pp"), settings=settings, runtime=runtime).statements

        assert isinstance(function, FunctionStatement)
        assert function.name == "func"
        assert function.return_type == "Undef"
        assert function.docstring.endswith("@return [Undef] Returns nothing.")

    def test_plan(self, settings, runtime, fixture_content):
        """Test plan statements on a current runtime."""
        (plan,) = _parse(fixture_content("plan.pp"), "plans/plann.pp", settings=settings, runtime=runtime).statements

        assert isinstance(plan, PlanStatement)
        assert plan.name == "plann"
        assert plan.docstring.startswith("A simple plan.")

    def test_type_aliases(self, settings, runtime, fixture_content):
        """Test data type alias statements."""
        simple, complex_alias = _parse(
            fixture_content("type_alias.pp"), "types/alias.pp", settings=settings, runtime=runtime
        ).statements

        assert isinstance(simple, DataTypeAliasStatement)
        assert simple.docstring == "Documentation for Amodule::SimpleAlias"
        assert simple.alias_of == "Variant[Numeric,String[1,20]]"
        assert complex_alias.docstring == "Documentation for Amodule::ComplexAlias"

    def test_other_statements_are_ignored(self, settings, runtime):
        """Test that non-definitions contribute no statements."""
        source = "include foo\n\n# Web node\nnode 'web' {\n}\n\n# Documented\ndefine dt {\n}\n"

        parser = _parse(source, settings=settings, runtime=runtime)

        assert [s.name for s in parser.statements] == ["dt"]
        assert parser.statements[0].docstring == "Documented"

    def test_form_feed_before_comment(self, settings, runtime):
        """Test that a form feed in the source does not shift the docstring scan."""
        parser = _parse("$x = 1 \x0c\n# Doc\nclass klass {\n}\n", settings=settings, runtime=runtime)

        statement = parser.statements[0]
        assert statement.line == 3
        assert statement.docstring == "Doc"
        assert statement.comments_range == (2, 2)

    def test_comment_separated_by_two_blank_lines(self, settings, runtime):
        """Test that a distant comment is not attached."""
        parser = _parse("# Orphaned comment\n\n\nclass klass {\n}\n", settings=settings, runtime=runtime)

        assert parser.statements[0].docstring == ""


class TestLifecycle:
    """Test parser state and result immutability."""

    def test_initial_state(self, settings, runtime):
        """Test that parsing is lazy."""
        parser = PuppetParser("class a {\n}\n", "init.pp", settings=settings, runtime=runtime)

        assert parser.state == ParserState.UNPARSED

    def test_parse_is_idempotent(self, settings, runtime):
        """Test that a second parse returns the cached statements."""
        parser = PuppetParser("class a {\n}\n", "init.pp", settings=settings, runtime=runtime)

        with patch.object(AstAdapter, "parse", autospec=True, side_effect=AstAdapter.parse) as mock_parse:
            first = parser.parse().statements
            second = parser.parse().statements

        assert mock_parse.call_count == 1
        assert first is second
        assert parser.state == ParserState.PARSED

    def test_failed_parse_is_idempotent(self, settings, runtime):
        """Test that a failed parse keeps its error."""
        parser = PuppetParser("}\n", "init.pp", settings=settings, runtime=runtime)

        first_error = parser.parse().error
        second_error = parser.parse().error

        assert first_error is second_error
        assert parser.statements == ()

    def test_accessing_result_parses(self, settings, runtime):
        """Test that reading the result triggers parsing."""
        parser = PuppetParser("class a {\n}\n", "init.pp", settings=settings, runtime=runtime)

        assert len(parser.enumerator()) == 1
        assert parser.state == ParserState.PARSED

    def test_result_is_frozen(self, settings, runtime):
        """Test that neither the result nor its statements can change."""
        parser = _parse("class a {\n}\n", settings=settings, runtime=runtime)

        with pytest.raises(ValidationError):
            parser.result.statements = ()
        with pytest.raises(ValidationError):
            parser.statements[0].name = "b"
        with pytest.raises(TypeError):
            parser.statements[0] = None

    def test_statement_parameters_are_frozen(self, settings, runtime):
        """Test that the parameters of a parsed statement cannot be changed in place."""
        parser = _parse("class a (String $b, $c = 1) {\n}\n", settings=settings, runtime=runtime)
        parameters = parser.statements[0].parameters

        assert isinstance(parameters, tuple)
        assert [p.name for p in parameters] == ["b", "c"]
        with pytest.raises(AttributeError):
            parameters.clear()
        with pytest.raises(ValidationError):
            parameters[0].name = "d"


    def test_empty_file_parses_with_no_statements(self, settings, runtime):
        """Test a manifest with nothing documentable."""
        parser = _parse("# just a comment\n", settings=settings, runtime=runtime)

        assert parser.state == ParserState.PARSED
        assert parser.statements == ()
        assert parser.error is None


def test_result_rejects_statements_with_error():
    """Test the result invariant."""
    statement = ClassStatement(name="a", file="init.pp", line=1)

    with pytest.raises(ValidationError):
        ParseResult(statements=(statement,), error=ParseError(message="boom"))


def test_grammar_options_follow_runtime():
    """Test that task syntax is enabled only where the runtime supports it."""
    assert grammar_options_for(RuntimeSettings(supported_settings=["tasks"])).tasks is True
    assert grammar_options_for(RuntimeSettings(supported_settings=[])).tasks is False
    assert grammar_options_for(RuntimeSettings(supported_settings=["tasks"]), tasks=False).tasks is False


def test_parse_source(settings, runtime):
    """Test the convenience wrapper."""
    result = parse_source("# Doc\nfunction f() {\n}\n", "functions/f.pp", settings=settings, runtime=runtime)

    assert result.succeeded
    assert result.statements[0].docstring == "Doc"
