import pytest

from storefront.application.status import (
    ALLOWED_TRANSITIONS, TERMINAL_STATES, can_transition, check_transition,
    parse_order_status, parse_payment_status_filter, parse_status_filter,
)
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import InvalidStatusTransition, ValidationFailed

@pytest.mark.parametrize("current,requested", [
    ("pending", "confirmed"),
    ("pending", "cancelled"),
    ("confirmed", "processing"),
    ("confirmed", "delivered"),
    ("processing", "shipped"),
    ("shipped", "delivered"),
])
def test_forward_transitions_allowed(current, requested):
    assert can_transition(current, requested)

@pytest.mark.parametrize("current,requested", [
    ("cancelled", "pending"),
    ("delivered", "shipped"),
    ("shipped", "processing"),
    ("pending", "delivered"),
])
def test_backward_or_skipping_transitions_rejected(current, requested):
    with pytest.raises(InvalidStatusTransition):
        check_transition(current, requested)

def test_every_status_has_a_rule():
    assert set(ALLOWED_TRANSITIONS) == {s.value for s in OrderStatus}

def test_terminal_states_have_no_exits():
    for state in TERMINAL_STATES:
        assert ALLOWED_TRANSITIONS[state] == set()

def test_same_status_is_allowed():
    for state in OrderStatus:
        assert can_transition(state.value, state.value)

def test_check_transition_not_enforced():
    check_transition("delivered", "pending", enforce=False)

def test_parse_order_status():
    assert parse_order_status("shipped") == "shipped"
    with pytest.raises(ValidationFailed):
        parse_order_status("Shipped")

def test_filters_treat_all_as_no_filter():
    assert parse_status_filter(None) is None
    assert parse_status_filter("all") is None
    assert parse_status_filter("pending") == "pending"
    assert parse_payment_status_filter("all") is None
    assert parse_payment_status_filter("failed") == "failed"
