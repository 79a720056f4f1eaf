"""
Tests for backend operator records and the state-vector backend.
"""

import math

import numpy as np
import pytest

from qdiagram import (
    BackendError,
    BackendOp,
    GateOperation,
    ProductState,
    QuantumCircuit,
    StatevectorBackend,
    execute_circuit,
    to_backend_op,
)
from qdiagram.backend import gate_matrix

SQ = 1 / np.sqrt(2)


def basis(index, num_qubits):
    v = np.zeros(2 ** num_qubits, dtype=complex)
    v[index] = 1
    return v


class TestBackendOp:
    """Tests for forwarding gates to operator records."""

    def test_single_parameter_is_theta(self):
        op = to_backend_op(GateOperation.parametric_single(1, "Rx", [0.1]))
        assert op == BackendOp("Rx", (1,), {"theta": 0.1})

    def test_ising_parameter_is_phi(self):
        op = to_backend_op(GateOperation.parametric_two_wire(1, 2, "Rzz", [0.2]))
        assert op.params == {"phi": 0.2}

    def test_three_parameters(self):
        op = to_backend_op(GateOperation.parametric_single(2, "Rn", [0.1, 0.2, 0.3]))
        assert op.params == {"theta": 0.1, "phi": 0.2, "lambda": 0.3}

    def test_generic_parameter_names(self):
        op = to_backend_op(GateOperation.parametric_single(1, "U", [1.0, 2.0]))
        assert op.params == {"p0": 1.0, "p1": 2.0}

    def test_role_order_and_controls_forwarded(self):
        op = to_backend_op(GateOperation.multi([4, 1, 2], "X", controls=2))
        assert op.wires == (4, 1, 2)
        assert op.controls == 2

    @pytest.mark.parametrize("gate, controls", [
        (GateOperation.controlled(2, 1, "CNOT"), 1),
        (GateOperation.parametric_controlled(1, 2, "CRz", [0.5]), 1),
        (GateOperation.three_wire(1, 2, 3, "Toffoli"), 2),
        (GateOperation.three_wire(1, 2, 3, "Fredkin"), 1),
        (GateOperation.four_wire(1, 2, 3, 4, "CCCNOT"), 3),
        (GateOperation.two_wire(1, 2, "X"), 0),
        (GateOperation.multi([1, 2], "X"), 0),
        (GateOperation.three_wire(1, 2, 3, "Oracle"), 0),
    ])
    def test_control_count_by_kind(self, gate, controls):
        assert to_backend_op(gate).controls == controls


class TestGateMatrices:
    """Tests for operator lookup."""

    @pytest.mark.parametrize("op", [
        BackendOp("H", (1,)),
        BackendOp("Rn", (1,), {"theta": 0.3, "phi": 0.2, "lambda": 0.1}),
        BackendOp("iSWAP", (1, 2)),
        BackendOp("√SWAP", (1, 2)),
        BackendOp("Rxx", (1, 2), {"phi": 0.7}),
        BackendOp("CRy", (1, 2), {"theta": 1.1}, controls=1),
        BackendOp("CPHASE", (1, 2), {"theta": 0.4}, controls=1),
        BackendOp("Fredkin", (1, 2, 3), controls=1),
        BackendOp("CCCNOT", (1, 2, 3, 4), controls=3),
        BackendOp("X", (1, 2, 3, 4, 5), controls=4),
    ])
    def test_unitary(self, op):
        m = gate_matrix(op)
        assert m.shape == (2 ** len(op.wires),) * 2
        np.testing.assert_allclose(m.conj().T @ m, np.eye(m.shape[0]), atol=1e-12)

    def test_unsupported_gate(self):
        with pytest.raises(BackendError):
            gate_matrix(BackendOp("Oracle", (1,)))

    def test_unsupported_wire_count(self):
        with pytest.raises(BackendError):
            gate_matrix(BackendOp("Toffoli", (1, 2)))

    @pytest.mark.parametrize("name, params", [
        ("X", {}),
        ("CNOT", {}),
        ("Rz", {"theta": 0.3}),
    ])
    def test_uncontrolled_two_wire_is_not_promoted(self, name, params):
        """Without a control count a single-qubit name on two wires is unsupported."""
        with pytest.raises(BackendError):
            gate_matrix(BackendOp(name, (1, 2), params))

    def test_control_count_must_match_family(self):
        with pytest.raises(BackendError):
            gate_matrix(BackendOp("Toffoli", (1, 2, 3), controls=1))

    def test_wrong_parameter_count(self):
        with pytest.raises(BackendError):
            gate_matrix(BackendOp("Rx", (1,), {"p0": 0.1, "p1": 0.2}))

    def test_tables_are_read_only(self):
        m = gate_matrix(BackendOp("X", (1,)))
        with pytest.raises(ValueError):
            m[0, 0] = 5


class TestStatevectorBackend:
    """Tests for circuit execution."""

    def test_default_initial_state(self, backend):
        state = backend.run(QuantumCircuit(2))
        np.testing.assert_allclose(state.get_statevector(), basis(0, 2))

    def test_wire_one_is_most_significant(self):
        state = execute_circuit(QuantumCircuit(2).x(1))
        np.testing.assert_allclose(state.get_statevector(), basis(2, 2))

    def test_bell(self, bell_state, assert_normalized):
        np.testing.assert_allclose(bell_state.get_statevector(), [SQ, 0, 0, SQ], atol=1e-12)
        assert_normalized(bell_state)

    def test_ghz(self, ghz_circuit):
        probs = execute_circuit(ghz_circuit).probabilities()
        np.testing.assert_allclose(probs, [0.5, 0, 0, 0, 0, 0, 0, 0.5], atol=1e-12)

    def test_cnot_with_control_below_target(self):
        state = execute_circuit(QuantumCircuit(2).x(2).cx(2, 1))
        np.testing.assert_allclose(state.get_statevector(), basis(3, 2))

    def test_swap(self):
        state = execute_circuit(QuantumCircuit(3).x(1).swap(1, 3))
        np.testing.assert_allclose(state.get_statevector(), basis(1, 3))

    def test_toffoli(self):
        state = execute_circuit(QuantumCircuit(3).x(1).x(3).ccx(1, 3, 2))
        np.testing.assert_allclose(state.get_statevector(), basis(7, 3))

    def test_toffoli_needs_both_controls(self):
        state = execute_circuit(QuantumCircuit(3).x(1).ccx(1, 2, 3))
        np.testing.assert_allclose(state.get_statevector(), basis(4, 3))

    def test_fredkin(self):
        state = execute_circuit(QuantumCircuit(3).x(1).x(2).cswap(1, 2, 3))
        np.testing.assert_allclose(state.get_statevector(), basis(5, 3))

    def test_cs_is_controlled_swap(self):
        circuit = QuantumCircuit(3).x(1).x(2).add_gate(GateOperation.three_wire(1, 2, 3, "CS"))
        np.testing.assert_allclose(execute_circuit(circuit).get_statevector(), basis(5, 3))

    @pytest.mark.parametrize("gate", [
        GateOperation.multi([1, 2], "X"),
        GateOperation.two_wire(1, 2, "X"),
    ])
    def test_boxed_two_wire_gate_is_rejected(self, gate):
        """A gate drawn as a plain span box never runs as a controlled gate."""
        circuit = QuantumCircuit(2).x(1).add_gate(gate)
        with pytest.raises(BackendError):
            execute_circuit(circuit)

    def test_cccnot_and_mcx_agree(self):
        a = execute_circuit(QuantumCircuit(4).x(1).x(2).x(3).cccx(1, 2, 3, 4))
        b = execute_circuit(QuantumCircuit(4).x(1).x(2).x(3).mcx([1, 2, 3], 4))
        np.testing.assert_allclose(a.get_statevector(), basis(15, 4))
        np.testing.assert_allclose(b.get_statevector(), basis(15, 4))

    def test_rx_pi(self, assert_statevector_close):
        state = execute_circuit(QuantumCircuit(1).rx(1, math.pi))
        assert_statevector_close(state, [0, 1])

    def test_controlled_phase_pi_is_cz(self):
        a = execute_circuit(QuantumCircuit(2).h(1).h(2).cp(1, 2, math.pi))
        b = execute_circuit(QuantumCircuit(2).h(1).h(2).cz(1, 2))
        np.testing.assert_allclose(a.get_statevector(), b.get_statevector(), atol=1e-12)

    def test_rzz_phases(self):
        state = execute_circuit(QuantumCircuit(2).rzz(1, 2, math.pi / 2))
        expected = np.exp(-1j * math.pi / 4) * basis(0, 2)
        np.testing.assert_allclose(state.get_statevector(), expected, atol=1e-12)

    def test_product_initial_state(self):
        circuit = QuantumCircuit(2, initial_states=[ProductState(("1", "0"))])
        np.testing.assert_allclose(execute_circuit(circuit).get_statevector(), basis(2, 2))

    def test_plus_state(self, backend):
        state = backend.init_state(["+"])
        np.testing.assert_allclose(state.get_statevector(), [SQ, SQ])

    def test_unknown_initial_state(self, backend):
        with pytest.raises(BackendError):
            backend.init_state(["0", "bogus"])

    def test_qubit_limit(self, backend):
        with pytest.raises(BackendError):
            backend.init_state(["0"] * (backend.max_qubits + 1))

    def test_wire_out_of_range(self, backend):
        state = backend.init_state(["0", "0"])
        with pytest.raises(BackendError):
            backend.apply(state, BackendOp("X", (3,)))

    def test_unsupported_gate_in_circuit(self):
        circuit = QuantumCircuit(1).add_gate(GateOperation.single(1, "Oracle"))
        with pytest.raises(BackendError):
            execute_circuit(circuit)

    def test_circuit_is_unchanged(self, bell_circuit):
        before = bell_circuit.gates
        execute_circuit(bell_circuit)
        assert bell_circuit.gates == before
