"""Tests for core ID types and the error hierarchy."""

import pytest

from core.errors import ConfigError, InternalInvariantViolation, RoadNetworkError
from core.types import NodeID, NodeKind, RoadID, SettlementID


def test_node_id_creation() -> None:
    """Test NodeID creation."""
    node_id = NodeID(7)
    assert node_id == 7


def test_road_id_creation() -> None:
    """Test RoadID creation."""
    road_id = RoadID(42)
    assert road_id == 42


def test_settlement_id_creation() -> None:
    """Test SettlementID creation."""
    settlement_id = SettlementID(1)
    assert settlement_id == 1


def test_node_kind_values() -> None:
    """Test NodeKind string values."""
    assert NodeKind.SETTLEMENT.value == "SETTLEMENT"
    assert NodeKind("JUNCTION") is NodeKind.JUNCTION
    assert {kind.value for kind in NodeKind} == {"NORMAL", "JUNCTION", "SETTLEMENT"}


def test_config_error_is_value_error() -> None:
    """ConfigError can be caught as ValueError or as the package base error."""
    with pytest.raises(ValueError):
        raise ConfigError("bad range")
    assert issubclass(ConfigError, RoadNetworkError)


def test_invariant_violation_is_runtime_error() -> None:
    """InternalInvariantViolation is not a ValueError."""
    assert issubclass(InternalInvariantViolation, RuntimeError)
    assert issubclass(InternalInvariantViolation, RoadNetworkError)
    assert not issubclass(InternalInvariantViolation, ValueError)
