"""Tests for suite declaration and inherited-test pruning."""

import sys
import unittest

import pytest

from matchy import be, configure, expect
from matchy.errors import SuiteBodyError, SuiteDefinitionError, SuiteNameError
from matchy.suites.runner import TestStatus, run_suites
from matchy.suites.suite import (
    CURRENT_SUITE,
    SharedExamples,
    SuiteCapabilities,
    constantize,
    current_suite,
    declare,
    ensure_suite_capabilities,
    get_suite,
    get_suite_registry,
    helper,
    setup,
    teardown,
    test,
    test_method_name,
    testing,
)


def _passing(self):
    expect(1).should(be(1))


class TestDeclare:
    def test_creates_registered_suite_class(self):
        @testing("Adder")
        def adder():
            test("adds")(_passing)

        suite = get_suite(adder)
        assert suite.__name__ == "AdderTest"
        assert issubclass(suite, unittest.TestCase)
        assert issubclass(suite, SuiteCapabilities)
        assert get_suite_registry()["AdderTest"] is suite
        assert getattr(sys.modules[__name__], "AdderTest") is suite
        assert suite.__module__ == __name__

    def test_decorator_returns_body(self):
        def body():
            pass

        assert testing("Returned")(body) is body
        assert body.__matchy_suite__.__name__ == "ReturnedTest"
        assert get_suite(body.__matchy_suite__) is body.__matchy_suite__

    def test_get_suite_rejects_plain_callables(self):
        with pytest.raises(SuiteDefinitionError, match="neither a suite nor a suite body"):
            get_suite(_passing)

    def test_direct_form(self):
        def body():
            test("adds")(_passing)

        cls = testing("Direct", "direct form", body)

        assert cls.__name__ == "DirectTest"
        assert cls.description == "direct form"

    def test_description_defaults_to_identifier(self):
        @testing("A Thing")
        def suite():
            pass

        assert get_suite(suite).description == "A Thing"

    def test_non_string_description_is_ignored(self):
        cls = declare("Widget", 42, lambda: None)
        assert cls.description == "Widget"

    def test_class_identifier(self):
        class Parser:
            pass

        cls = declare(Parser, None, lambda: None)

        assert cls.__name__ == "ParserTest"
        assert cls.description == "Parser"

    def test_current_suite_is_reset_after_body(self):
        seen = []

        @testing("Scoped")
        def scoped():
            seen.append(current_suite())

        assert seen == [get_suite(scoped)]
        assert CURRENT_SUITE.get() is None

    def test_current_suite_is_reset_when_body_raises(self):
        def body():
            raise RuntimeError("broken body")

        with pytest.raises(RuntimeError, match="broken body"):
            declare("Broken", None, body)

        assert CURRENT_SUITE.get() is None

    def test_failed_body_leaves_nothing_registered(self):
        class Engine(unittest.TestCase):
            def test_from_base(self):
                pass

        def body():
            test("ok")(_passing)
            raise RuntimeError("broken body")

        with pytest.raises(RuntimeError, match="broken body"):
            declare("Broken", None, body, type=Engine)

        assert "BrokenTest" not in get_suite_registry()
        assert not hasattr(sys.modules[__name__], "BrokenTest")
        assert run_suites().total == 0
        for suite in ensure_suite_capabilities(Engine).suite_types():
            assert suite.all_tests() == suite.own_tests()

    def test_failed_redeclaration_keeps_previous_suite(self):
        def good():
            test("one")(_passing)

        def bad():
            raise RuntimeError("broken body")

        previous = declare("Kept", None, good)
        with pytest.raises(RuntimeError):
            declare("Kept", None, bad)

        assert get_suite_registry()["KeptTest"] is previous

    def test_unknown_option_raises(self):
        with pytest.raises(TypeError, match="Unknown suite options: base"):
            declare("Opts", None, lambda: None, base=unittest.TestCase)


class TestNaming:
    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("Adder", "Adder"),
            ("a thing", "AThing"),
            ("user_profile", "UserProfile"),
            ("Error Expectations!", "ErrorExpectations"),
            ("http2 client", "Http2Client"),
        ],
    )
    def test_constantize(self, identifier, expected):
        assert constantize(identifier) == expected

    def test_no_word_characters(self):
        with pytest.raises(SuiteNameError, match="no letters or digits"):
            declare("!!!", None, lambda: None)

    def test_leading_digit(self):
        with pytest.raises(SuiteNameError, match="not a valid class name"):
            declare("9 lives", None, lambda: None)

    def test_name_error_is_value_error(self):
        with pytest.raises(ValueError):
            constantize("")

    def test_test_method_name(self):
        assert test_method_name("adds two numbers") == "test_adds_two_numbers"
        assert test_method_name("equal == equal") == "test_equal_equal"

    def test_test_method_name_needs_word_characters(self):
        with pytest.raises(SuiteDefinitionError):
            test_method_name("??")


class TestBodyShape:
    def test_non_callable_body(self):
        with pytest.raises(SuiteBodyError, match="must be callable"):
            declare("Shape", None, "not a body")

    def test_missing_body(self):
        with pytest.raises(SuiteBodyError):
            declare("Shape", None, None)

    def test_body_with_arguments(self):
        with pytest.raises(SuiteBodyError, match="must take no arguments"):
            declare("Shape", None, lambda suite: None)

    def test_body_error_is_type_error(self):
        with pytest.raises(TypeError):
            declare("Shape", None, lambda suite: None)

    def test_optional_arguments_are_allowed(self):
        cls = declare("Shape", None, lambda suite=None: None)
        assert cls.__name__ == "ShapeTest"

    def test_body_in_description_slot(self):
        def body():
            test("adds")(_passing)

        with pytest.raises(SuiteBodyError, match="description must not be callable"):
            testing("Positional", body)
        with pytest.raises(SuiteBodyError, match="description must not be callable"):
            declare("Positional", body)

        assert get_suite_registry() == {}
        assert not hasattr(body, "__matchy_suite__")

    def test_shared_body_in_description_slot(self):
        class Helpers(SharedExamples):
            pass

        with pytest.raises(SuiteBodyError, match="description must not be callable"):
            Helpers.declare("Positional", lambda: None)

        assert get_suite_registry() == {}


class TestRegistration:
    def test_test_outside_suite_raises(self):
        with pytest.raises(SuiteDefinitionError, match="No suite is being declared"):
            test("orphan")(_passing)

    def test_own_and_all_tests(self):
        @testing("Owner")
        def owner():
            test("first")(_passing)
            test("second")(_passing)

        owner = get_suite(owner)
        assert owner.own_tests() == {"test_first", "test_second"}
        assert owner.all_tests() == {"test_first", "test_second"}

    def test_duplicate_test_name_raises(self):
        def body():
            test("same")(_passing)
            test("same")(_passing)

        with pytest.raises(SuiteDefinitionError, match="already defines a test named 'same'"):
            declare("Dupes", None, body)

    def test_setup_teardown_and_helper(self):
        events = []

        @testing("Lifecycle")
        def lifecycle():
            @setup
            def _(self):
                events.append("setup")
                self.value = 40

            @teardown
            def _(self):
                events.append("teardown")

            @helper
            def add_two(self, value):
                return value + 2

            @test("uses helper")
            def _(self):
                events.append("test")
                expect(self.add_two(self.value)).should(be(42))

        result = run_suites([lifecycle])

        assert result.successful
        assert events == ["setup", "test", "teardown"]

    def test_helpers_outside_suite_raise(self):
        with pytest.raises(SuiteDefinitionError):
            setup(_passing)
        with pytest.raises(SuiteDefinitionError):
            helper(_passing)


class TestBase:
    def test_default_base_is_configured_class(self):
        class Engine(unittest.TestCase):
            pass

        configure(test_case_class=Engine)

        cls = declare("Configured", None, lambda: None)

        assert issubclass(cls, Engine)

    @pytest.mark.parametrize("option", ["type", "testcase"])
    def test_base_option(self, option):
        class Engine(unittest.TestCase):
            pass

        cls = declare("Optioned", None, lambda: None, **{option: Engine})

        assert issubclass(cls, Engine)

    def test_capabilities_attached_once(self):
        class Engine(unittest.TestCase):
            pass

        adapted = ensure_suite_capabilities(Engine)

        assert ensure_suite_capabilities(Engine) is adapted
        assert ensure_suite_capabilities(adapted) is adapted
        assert issubclass(adapted, Engine)
        assert issubclass(adapted, SuiteCapabilities)

    def test_base_must_be_a_class(self):
        with pytest.raises(TypeError, match="must be a class"):
            ensure_suite_capabilities("unittest.TestCase")


class TestPruning:
    def test_sibling_suites_do_not_share_tests(self):
        class Engine(unittest.TestCase):
            pass

        @testing("Alpha", type=Engine)
        def alpha():
            test("alpha only")(_passing)

        @testing("Beta", type=Engine)
        def beta():
            test("beta only")(_passing)

        alpha, beta = get_suite(alpha), get_suite(beta)
        assert alpha.all_tests() == {"test_alpha_only"}
        assert beta.all_tests() == {"test_beta_only"}
        assert not hasattr(alpha, "test_beta_only")
        assert getattr(beta, "test_alpha_only", None) is None

    def test_base_test_methods_are_not_inherited(self):
        class Engine(unittest.TestCase):
            def test_from_base(self):
                pass

        @testing("Derived", type=Engine)
        def derived():
            test("own")(_passing)

        derived = get_suite(derived)
        assert derived.all_tests() == {"test_own"}
        assert derived.test_from_base is None
        assert callable(Engine.test_from_base)

    def test_suite_used_as_base_keeps_its_own_tests(self):
        class Engine(unittest.TestCase):
            pass

        @testing("Parent", type=Engine)
        def parent():
            test("parent test")(_passing)

        @testing("Child", type=parent)
        def child():
            test("child test")(_passing)

        assert get_suite(parent).all_tests() == {"test_parent_test"}
        assert get_suite(child).all_tests() == {"test_child_test"}
        assert issubclass(get_suite(child), get_suite(parent))

    def test_every_suite_only_exposes_own_tests(self):
        class Engine(unittest.TestCase):
            def test_shared(self):
                pass

        @testing("One", type=Engine)
        def one():
            test("a")(_passing)

        @testing("Two", type=one)
        def two():
            test("b")(_passing)

        @testing("Three", type=Engine)
        def three():
            test("c")(_passing)

        base = ensure_suite_capabilities(Engine)
        for suite in base.suite_types():
            assert suite.all_tests() == suite.own_tests()

    def test_redeclaration_replaces_binding_and_tests(self):
        class Engine(unittest.TestCase):
            pass

        @testing("Again", type=Engine)
        def first():
            test("one")(_passing)

        @testing("Again", type=Engine)
        def second():
            test("two")(_passing)

        first, second = get_suite(first), get_suite(second)
        assert second is not first
        assert get_suite_registry()["AgainTest"] is second
        assert getattr(sys.modules[__name__], "AgainTest") is second
        assert second.all_tests() == {"test_two"}
        assert not hasattr(second, "test_one")


class TestSharedExamples:
    def test_examples_and_helpers_are_mixed_in(self):
        class Stacks(SharedExamples):
            def make(self):
                return []

        @Stacks.example("starts empty")
        def _(self):
            expect(len(self.make())).should(be(0))

        @Stacks.declare("List Stack")
        def list_stack():
            @test("pushes")
            def _(self):
                stack = self.make()
                stack.append(1)
                expect(stack).should(be([1]))

        @Stacks.declare("Other Stack")
        def other_stack():
            pass

        list_stack, other_stack = get_suite(list_stack), get_suite(other_stack)
        assert list_stack.__name__ == "ListStackTest"
        assert issubclass(list_stack, Stacks)
        assert list_stack.own_tests() == {"test_starts_empty", "test_pushes"}
        assert list_stack.all_tests() == list_stack.own_tests()
        assert other_stack.all_tests() == {"test_starts_empty"}

        result = run_suites([list_stack, other_stack])

        assert result.total == 3
        assert result.successful

    def test_examples_are_inherited_between_shared_classes(self):
        class Base(SharedExamples):
            pass

        class Derived(Base):
            pass

        Base.example("base example")(_passing)
        Derived.example("derived example")(_passing)

        assert set(Derived.examples()) == {"base example", "derived example"}
        assert set(Base.examples()) == {"base example"}

    def test_direct_form(self):
        class Helpers(SharedExamples):
            pass

        cls = Helpers.declare("Helped", "with helpers", lambda: None)

        assert cls.description == "with helpers"
        assert issubclass(cls, Helpers)


def test_run_reports_pruned_suites_only_once():
    class Engine(unittest.TestCase):
        pass

    @testing("Left", type=Engine)
    def left():
        test("left")(_passing)

    @testing("Right", type=Engine)
    def right():
        @test("right")
        def _(self):
            expect(1).should(be(2))

    result = run_suites([left, right])

    assert [outcome.status for outcome in result.outcomes] == [
        TestStatus.PASSED,
        TestStatus.FAILED,
    ]
