"""
Pytest configuration and fixtures for qdiagram tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the parent directory to path so qdiagram can be imported
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# Test Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# =============================================================================
# Fixtures - Circuits
# =============================================================================

@pytest.fixture
def empty_circuit():
    """Two wires, no gates."""
    from qdiagram import QuantumCircuit
    return QuantumCircuit(2)


@pytest.fixture
def bell_circuit():
    """H on wire 1 followed by CNOT 1 -> 2."""
    from qdiagram import QuantumCircuit
    return QuantumCircuit(2).h(1).cx(1, 2)


@pytest.fixture
def ghz_circuit():
    """3-qubit GHZ preparation (|000> + |111>) / sqrt(2)."""
    from qdiagram import QuantumCircuit
    return QuantumCircuit(3).h(1).cx(1, 2).cx(2, 3)


@pytest.fixture
def backend():
    """Fresh state-vector backend."""
    from qdiagram import StatevectorBackend
    return StatevectorBackend()


@pytest.fixture
def bell_state(bell_circuit):
    """Bell state (|00> + |11>) / sqrt(2)."""
    from qdiagram import execute_circuit
    return execute_circuit(bell_circuit)


# =============================================================================
# Fixtures - Test Data
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def random_circuits():
    """Reproducible random circuits mixing every gate shape."""
    from qdiagram import QuantumCircuit

    def _random_circuits(count=20, num_qubits=5, num_gates=15, seed=42):
        gen = np.random.default_rng(seed)
        circuits = []
        for _ in range(count):
            circuit = QuantumCircuit(num_qubits)
            for _ in range(num_gates):
                choice = gen.integers(5)
                wires = [int(w) + 1 for w in gen.permutation(num_qubits)[:4]]
                if choice == 0:
                    circuit.h(wires[0])
                elif choice == 1:
                    circuit.cx(wires[0], wires[1])
                elif choice == 2:
                    circuit.rzz(wires[0], wires[1], float(gen.uniform(0, 2 * np.pi)))
                elif choice == 3:
                    circuit.ccx(wires[0], wires[1], wires[2])
                else:
                    circuit.cswap(wires[0], wires[1], wires[2])
            circuits.append(circuit)
        return circuits
    return _random_circuits


# =============================================================================
# Utility Functions
# =============================================================================

@pytest.fixture
def assert_normalized():
    """Fixture providing normalization assertion helper."""
    def _assert_normalized(state, tolerance=1e-10):
        """Assert that state probabilities sum to 1."""
        probs = state.probabilities()
        total = np.sum(probs)
        assert abs(total - 1.0) < tolerance, (
            f"State not normalized: probabilities sum to {total:.10f}"
        )
    return _assert_normalized


@pytest.fixture
def assert_statevector_close():
    """Fixture providing statevector comparison helper."""
    def _assert_close(state, expected, tolerance=1e-6):
        """Assert that statevector is close to expected (up to global phase)."""
        actual = state.get_statevector()
        expected = np.asarray(expected, dtype=complex)

        # Find global phase by comparing first non-zero elements
        for i in range(len(expected)):
            if abs(expected[i]) > 1e-10:
                phase = actual[i] / expected[i]
                break
        else:
            phase = 1.0

        adjusted = actual / phase if abs(phase) > 1e-10 else actual

        assert np.allclose(adjusted, expected, atol=tolerance), (
            f"Statevector mismatch:\nExpected: {expected}\nActual: {actual}"
        )
    return _assert_close
