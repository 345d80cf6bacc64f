"""Tests for observing a view model with a full snapshot."""

import pytest

from viewmock import (
    NEVER_NOTIFIED_MESSAGE,
    FieldNotObserved,
    TypeMismatch,
    UnknownField,
    UnknownNotifiedField,
    ViewMock,
    observe,
)


class TestObservingAViewModel:
    """Basic usage: displayed values can be read by name or by accessor."""

    @pytest.fixture
    def view(self, person):
        return observe(person)

    def test_observe_returns_a_view_mock(self, view):
        assert isinstance(view, ViewMock)

    def test_retrieves_the_value_by_accessor(self, view):
        assert view.displayed_value(lambda vm: vm.name) == "One"

    def test_retrieves_the_value_by_string(self, view):
        assert view.displayed_value("name") == "One"

    def test_captures_every_declared_field(self, view):
        assert view.observed_fields == ["name", "unobserved_property"]
        assert view.displayed_value("unobserved_property") is None

    def test_initial_snapshot_matches_the_model(self, view):
        for name in view.observed_fields:
            assert view.displayed_value(name) == view.actual_value(name)


class TestFieldChangedWithoutNotification:
    """The view keeps showing the old value until the model notifies."""

    @pytest.fixture
    def view(self, person_cls):
        model = person_cls(name="Default")
        view = observe(model)
        model.name = "Not Notified"
        return view

    def test_model_holds_the_new_name(self, view):
        assert view.actual_value(lambda vm: vm.name) == "Not Notified"

    def test_view_still_shows_the_old_name(self, view):
        assert view.displayed_value(lambda vm: vm.name) == "Default"

    def test_is_displayed_as_reports_the_mismatch(self, view):
        assert view.is_displayed_as(lambda vm: vm.name, "Not Notified") is False

    def test_last_error_explains_the_missing_notification(self, view):
        view.is_displayed_as(lambda vm: vm.name, "Not Notified")
        assert view.last_error() == (
            "The viewModel is correct but the view was never notified "
            "with NotifyPropertyChanged."
        )

    def test_last_error_is_cleared_after_reading(self, view):
        view.is_displayed_as(lambda vm: vm.name, "Not Notified")
        assert view.last_error() == NEVER_NOTIFIED_MESSAGE
        assert view.last_error() == ""

    def test_stale_fields_lists_the_unnotified_field(self, view):
        assert view.stale_fields() == ["name"]


class TestFieldChangedWithNotification:
    def test_view_displays_the_new_name(self, person_cls):
        model = person_cls(name="Default")
        view = observe(model)

        model.change_name_and_notify("Notified Name")

        assert view.displayed_value(lambda vm: vm.name) == "Notified Name"
        assert view.stale_fields() == []

    def test_only_the_notified_field_is_refreshed(self, person_cls):
        model = person_cls(name="Default")
        view = observe(model)

        model.unobserved_property = "set quietly"
        model.change_name_and_notify("Notified Name")

        assert view.displayed_value("unobserved_property") is None
        assert view.stale_fields() == ["unobserved_property"]

    def test_notifications_apply_in_order(self, person_cls):
        model = person_cls(name="Default")
        view = observe(model)

        model.change_name_and_notify("first")
        model.name = "second"
        model.change_name_and_notify("third")

        assert view.displayed_value("name") == "third"


class TestFieldChangedAndNotifiedWithEmptyString:
    """An empty field name tells the view to refresh every field."""

    def test_view_displays_the_new_name(self, person_cls):
        model = person_cls(name="Default")
        view = observe(model)

        model.name = "Notified Name"
        model.notify_with_empty_string()

        assert view.displayed_value(lambda vm: vm.name) == "Notified Name"

    def test_every_field_matches_the_model_after_refresh(self, person_cls):
        model = person_cls(name="Default")
        view = observe(model)

        model.name = "A"
        model.unobserved_property = "B"
        model.notify_with_empty_string()

        for name in view.observed_fields:
            assert view.displayed_value(name) == view.actual_value(name)


class TestIsDisplayedAs:
    def test_true_when_the_view_shows_the_expected_value(self, person):
        view = observe(person)

        assert view.is_displayed_as(lambda vm: vm.name, "One")
        assert view.last_error() == ""

    def test_no_diagnostic_when_the_model_is_wrong_too(self, person):
        view = observe(person)

        assert view.is_displayed_as(lambda vm: vm.name, "Other") is False
        assert view.last_error() == ""

    def test_diagnoses_a_field_displayed_as_none(self, person):
        view = observe(person)
        person.unobserved_property = "late"

        assert view.is_displayed_as("unobserved_property", "late") is False
        assert view.last_error() == NEVER_NOTIFIED_MESSAGE

    def test_result_uses_value_equality(self, person_cls):
        model = person_cls(name="".join(["O", "ne"]))
        view = observe(model)

        assert view.is_displayed_as("name", "One")


class TestCounterWithProperties:
    """Properties are fields as well, including computed ones."""

    def test_captures_properties(self, counter):
        view = observe(counter)

        assert view.observed_fields == ["count", "doubled"]
        assert view.displayed_value(lambda vm: vm.doubled) == 2

    def test_dependent_property_goes_stale_when_not_notified(self, counter):
        view = observe(counter)

        counter.increment()

        assert view.displayed_value("count") == 2
        assert view.displayed_value("doubled") == 2
        assert view.actual_value("doubled") == 4
        assert view.stale_fields() == ["doubled"]

    def test_accepts_the_property_object_as_selector(self, counter, counter_cls):
        view = observe(counter)

        assert view.displayed_value(counter_cls.count) == 1


class TestErrors:
    def test_unknown_notified_field_propagates_to_the_model(self, person):
        observe(person)

        with pytest.raises(UnknownNotifiedField, match="no_such_field"):
            person.notify_unknown()

    def test_typed_read_returns_matching_value(self, person):
        view = observe(person)

        assert view.displayed_value("name", str) == "One"

    def test_typed_read_rejects_other_types(self, person):
        view = observe(person)

        with pytest.raises(TypeMismatch) as exc_info:
            view.displayed_value("name", int)

        assert exc_info.value.field_name == "name"
        assert isinstance(exc_info.value, TypeError)

    def test_typed_read_of_none_is_a_mismatch(self, person):
        view = observe(person)

        with pytest.raises(TypeMismatch):
            view.displayed_value("unobserved_property", str)

    def test_displayed_value_of_undeclared_field(self, person):
        view = observe(person)

        with pytest.raises(FieldNotObserved):
            view.displayed_value("nickname")

    def test_actual_value_of_undeclared_field(self, person):
        view = observe(person)

        with pytest.raises(UnknownField):
            view.actual_value("nickname")


def test_field_info_resolves_the_descriptor(person, person_cls):
    view = observe(person)

    info = view.field_info(lambda vm: vm.name)

    assert info.name == "name"
    assert info.owner is person_cls
    assert info.read(person) == "One"


def test_repr_lists_observed_fields(person):
    view = observe(person)

    assert repr(view) == (
        "ViewMock(PersonViewModel, observing=['name', 'unobserved_property'])"
    )


def test_capture_starts_displaying_a_field(person_cls):
    model = person_cls(name="One")
    view = ViewMock(model, populate=False)
    model.name = "Two"

    descriptor = view.capture(lambda vm: vm.name)

    assert descriptor.name == "name"
    assert view.observed_fields == ["name"]
    assert view.displayed_value("name") == "Two"
