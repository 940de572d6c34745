import pytest

from estimate_checker.domain.classification import classify
from estimate_checker.domain.models import ERROR, EXPECTED_FLIGHT, EXPECTED_STOCK, UNEXPECTED

EDD = "Estimated Delivery Dates"


def test_stock_status_beats_flight_marker():
    label = classify(EDD, "2024-01-01 (stock)", "2024-01-05 (flight)", "In Stock")
    assert label == EXPECTED_STOCK


def test_stock_marker_in_after_value_only():
    assert classify(EDD, "2024-01-01", "2024-01-05 (stock)", "") == EXPECTED_STOCK


@pytest.mark.parametrize(
    "status, before, after",
    [
        ("Flight Booked", "2024-01-01", "2024-01-05"),
        ("Awaiting Flight", "2024-01-01", "2024-01-05"),
        ("", "2024-01-01 (flight)", "2024-01-05"),
        ("", "2024-01-01", "2024-01-05 (flight)"),
    ],
)
def test_flight_rules(status, before, after):
    assert classify(EDD, before, after, status) == EXPECTED_FLIGHT


def test_delivery_dates_without_markers_are_unexpected():
    assert classify(EDD, "2024-01-01", "2024-01-05", "No Inventory Available") == UNEXPECTED


def test_markers_are_case_sensitive():
    assert classify(EDD, "2024-01-01 (STOCK)", "2024-01-05", "in stock") == UNEXPECTED


@pytest.mark.parametrize("status", ["", None, "In Stock", "No Inventory Available"])
def test_pulling_dates_always_flight(status):
    assert classify("Pulling Dates", "2024-01-01", "2024-01-02", status) == EXPECTED_FLIGHT


def test_po_change_is_error_even_for_stock_orders():
    assert classify("PO", "P1", "P2", "In Stock") == ERROR


@pytest.mark.parametrize(
    "field",
    ["Order Number", "PO", "Item", "Part ID", "Required Qty", "Request Date", "PO Create Date"],
)
def test_immutable_fields_are_errors(field):
    assert classify(field, "a", "b", "Awaiting Flight") == ERROR


@pytest.mark.parametrize("field", ["Status", "Stock Used", "Remaining Qty"])
def test_other_fields_are_unexpected(field):
    assert classify(field, "1", "2", "In Stock") == UNEXPECTED
