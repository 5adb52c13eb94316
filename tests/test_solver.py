# tests/test_solver.py
import numpy as np
import pytest

from dcsim_core.simulation import SingularSystemError, gaussian_elimination, solve, solve_node_voltages


class TestGaussianElimination:

    def test_matches_numpy(self):
        rng = np.random.default_rng(1234)
        G = rng.normal(size=(6, 6)) + 6 * np.eye(6)
        I = rng.normal(size=6)
        np.testing.assert_allclose(gaussian_elimination(G, I), np.linalg.solve(G, I), rtol=1e-12)

    def test_zero_leading_entry_needs_pivoting(self):
        G = np.array([[0.0, 1.0], [1.0, 0.0]])
        np.testing.assert_allclose(gaussian_elimination(G, np.array([2.0, 3.0])), [3.0, 2.0])

    def test_wide_conductance_range(self):
        G = np.array([[1000.0 + 5e-4, -5e-4], [-5e-4, 1.5e-3]])
        I = np.array([9000.0, 0.0])
        np.testing.assert_allclose(gaussian_elimination(G, I), np.linalg.solve(G, I), rtol=1e-12)

    def test_inputs_are_not_modified(self):
        G = np.array([[2.0, 1.0], [1.0, 3.0]])
        I = np.array([1.0, 2.0])
        gaussian_elimination(G, I)
        np.testing.assert_array_equal(G, [[2.0, 1.0], [1.0, 3.0]])
        np.testing.assert_array_equal(I, [1.0, 2.0])

    def test_singular_matrix(self):
        G = np.array([[1.0, -1.0], [-1.0, 1.0]])
        with pytest.raises(SingularSystemError) as excinfo:
            gaussian_elimination(G, np.zeros(2))
        assert excinfo.value.pivot_index == 1
        assert isinstance(excinfo.value, np.linalg.LinAlgError)
        assert "Singular System" in excinfo.value.get_diagnostic_report()

    def test_pivot_threshold_is_configurable(self):
        G = np.array([[1e-8]])
        assert gaussian_elimination(G, np.array([1e-8]))[0] == pytest.approx(1.0)
        with pytest.raises(SingularSystemError):
            gaussian_elimination(G, np.array([1e-8]), pivot_threshold=1e-6)

    def test_non_finite_solution(self):
        with pytest.raises(SingularSystemError, match="NaN/Inf"):
            gaussian_elimination(np.array([[1.0]]), np.array([np.inf]))

    @pytest.mark.parametrize("G, I", [
        (np.zeros((2, 3)), np.zeros(2)),
        (np.eye(2), np.zeros(3)),
        (np.zeros(4), np.zeros(4)),
    ])
    def test_shape_mismatch(self, G, I):
        with pytest.raises(ValueError):
            gaussian_elimination(G, I)


class TestSolveNodeVoltages:

    def test_ground_is_prepended(self):
        voltages = solve_node_voltages(np.array([[2.0]]), np.array([4.0]))
        assert voltages == (0.0, 2.0)
        assert all(isinstance(v, float) for v in voltages)

    def test_solve_alias(self):
        assert solve is solve_node_voltages
