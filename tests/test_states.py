"""
Tests for initial state descriptors.
"""

import pytest

from qdiagram import (
    BasisState,
    InitialState,
    NamedState,
    ProductState,
    QuantumCircuit,
    ValidationError,
)
from qdiagram.states import resolve_backend_labels, resolve_wire_labels


class TestDescriptors:
    """Tests for individual descriptors."""

    def test_basis_state_labels(self):
        state = BasisState("+")
        assert state.latex_label(2) == "\\ket{+}"
        assert state.backend_labels(3) == ["+", "+", "+"]

    def test_named_state_separates_display_and_backend(self):
        state = NamedState("Up", "\\uparrow")
        assert state.latex_label(1) == "\\ket{\\uparrow}"
        assert state.backend_labels(2) == ["Up", "Up"]

    def test_product_state(self):
        state = ProductState(["0", "1", "+"])
        assert state.labels == ("0", "1", "+")
        assert state.latex_label(2) == "\\ket{1}"
        assert state.backend_labels(3) == ["0", "1", "+"]

    def test_product_state_size_mismatch(self):
        with pytest.raises(ValidationError):
            ProductState(("0", "1")).backend_labels(3)
        with pytest.raises(ValidationError):
            ProductState(("0", "1")).latex_label(3)

    @pytest.mark.parametrize("qubit", [0, -1])
    def test_non_positive_qubit(self, qubit):
        with pytest.raises(ValidationError):
            BasisState("0").latex_label(qubit)

    def test_non_positive_width(self):
        with pytest.raises(ValidationError):
            BasisState("0").backend_labels(0)

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            InitialState()

    def test_incomplete_subclass_is_abstract(self):
        class LabelOnly(InitialState):
            def latex_label(self, qubit):
                return "\\ket{0}"

        with pytest.raises(TypeError):
            LabelOnly()


class TestResolution:
    """Tests for broadcast and per-wire resolution."""

    def test_single_descriptor_broadcasts(self):
        assert resolve_wire_labels([BasisState("0")], 2) == ["\\ket{0}", "\\ket{0}"]

    def test_one_descriptor_per_wire(self):
        states = [BasisState("0"), NamedState("1", "\\downarrow")]
        assert resolve_wire_labels(states, 2) == ["\\ket{0}", "\\ket{\\downarrow}"]
        assert resolve_backend_labels(states, 2) == ["0", "1"]

    def test_product_state_alone(self):
        assert resolve_backend_labels([ProductState(("1", "0"))], 2) == ["1", "0"]

    def test_wrong_number_of_descriptors(self):
        with pytest.raises(ValidationError):
            resolve_wire_labels([BasisState("0"), BasisState("1")], 3)

    def test_product_state_cannot_be_mixed(self):
        states = [ProductState(("0",)), BasisState("1")]
        with pytest.raises(ValidationError):
            resolve_wire_labels(states, 2)

    def test_empty_descriptor_list(self):
        with pytest.raises(ValidationError):
            resolve_wire_labels([], 2)

    def test_non_descriptor_entry(self):
        with pytest.raises(ValidationError):
            resolve_wire_labels(["0"], 1)

    def test_circuit_validates_states_on_construction(self):
        with pytest.raises(ValidationError):
            QuantumCircuit(3, initial_states=[ProductState(("0", "1"))])

    def test_circuit_default_state(self):
        circuit = QuantumCircuit(2)
        assert circuit.initial_states == (BasisState("0"),)
