"""Tests for B-spline bases, evaluation and fitting."""

import pytest
import torch
import torch.testing

import torchgausshermite.spline

GRID = torch.tensor([0.0, 0.5, 1.5, 2.0, 3.0], dtype=torch.float64)


class TestBSplineKnots:
    def test_clamped(self):
        grid = torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64)
        knots = torchgausshermite.spline.b_spline_knots(grid, 2)
        expected = torch.tensor(
            [0.0, 0.0, 0.0, 1.0, 2.0, 2.0, 2.0], dtype=torch.float64
        )
        torch.testing.assert_close(knots, expected)

    def test_degree_zero_is_grid(self):
        knots = torchgausshermite.spline.b_spline_knots(GRID, 0)
        torch.testing.assert_close(knots, GRID)

    def test_short_grid_raises(self):
        with pytest.raises(torchgausshermite.spline.KnotError):
            torchgausshermite.spline.b_spline_knots(
                torch.tensor([1.0], dtype=torch.float64), 3
            )

    def test_non_increasing_grid_raises(self):
        with pytest.raises(torchgausshermite.spline.KnotError):
            torchgausshermite.spline.b_spline_knots(
                torch.tensor([0.0, 1.0, 1.0, 2.0], dtype=torch.float64), 1
            )

    def test_negative_degree_raises(self):
        with pytest.raises(torchgausshermite.spline.DegreeError):
            torchgausshermite.spline.b_spline_knots(GRID, -1)

    def test_errors_share_base_class(self):
        assert issubclass(
            torchgausshermite.spline.KnotError, torchgausshermite.spline.SplineError
        )
        assert issubclass(
            torchgausshermite.spline.DegreeError,
            torchgausshermite.spline.SplineError,
        )


class TestBSplineNonzeroComponents:
    @pytest.mark.parametrize("degree", [0, 1, 2, 3])
    def test_matches_full_basis(self, degree):
        t = torch.linspace(0.0, 3.0, 37, dtype=torch.float64)
        left, values = torchgausshermite.spline.b_spline_nonzero_components(
            t, GRID, degree
        )
        assert left.dtype == torch.int64
        assert values.shape == (37, degree + 1)

        n_basis = GRID.shape[0] + degree - 1
        dense = torch.zeros(37, n_basis, dtype=torch.float64)
        columns = left.unsqueeze(-1) + torch.arange(degree + 1)
        dense.scatter_(1, columns, values)

        knots = torchgausshermite.spline.b_spline_knots(GRID, degree)
        expected = torchgausshermite.spline.b_spline_basis(t, knots, degree)
        torch.testing.assert_close(dense, expected, atol=1e-12, rtol=1e-12)

    @pytest.mark.parametrize("degree", [1, 2, 3])
    def test_partition_of_unity(self, degree):
        t = torch.linspace(0.0, 3.0, 50, dtype=torch.float64)
        _, values = torchgausshermite.spline.b_spline_nonzero_components(
            t, GRID, degree
        )
        torch.testing.assert_close(
            values.sum(-1), torch.ones(50, dtype=torch.float64)
        )

    def test_left_index_range(self):
        t = torch.tensor([-1.0, 0.0, 0.7, 3.0, 5.0], dtype=torch.float64)
        left, _ = torchgausshermite.spline.b_spline_nonzero_components(t, GRID, 3)
        assert left.tolist() == [0, 0, 1, 3, 3]

    def test_zero_outside_grid(self):
        t = torch.tensor([-0.5, 3.5], dtype=torch.float64)
        _, values = torchgausshermite.spline.b_spline_nonzero_components(
            t, GRID, 2
        )
        torch.testing.assert_close(values, torch.zeros(2, 3, dtype=torch.float64))

    def test_preserves_query_shape(self):
        t = torch.full((2, 3), 1.0, dtype=torch.float64)
        left, values = torchgausshermite.spline.b_spline_nonzero_components(
            t, GRID, 3
        )
        assert left.shape == (2, 3)
        assert values.shape == (2, 3, 4)


class TestBSplineEvaluate:
    def _spline(self, extrapolate):
        knots = torchgausshermite.spline.b_spline_knots(GRID, 1)
        control_points = torch.tensor(
            [0.0, 1.0, 3.0, 2.0, 0.0], dtype=torch.float64
        )
        return torchgausshermite.spline.BSpline(
            knots=knots,
            control_points=control_points,
            degree=1,
            extrapolate=extrapolate,
            batch_size=[],
        )

    def test_linear_interpolates_control_points(self):
        spline = self._spline("error")
        result = torchgausshermite.spline.b_spline_evaluate(spline, GRID)
        torch.testing.assert_close(result, spline.control_points)

    def test_call(self):
        spline = self._spline("error")
        t = torch.tensor([0.25, 1.0], dtype=torch.float64)
        torch.testing.assert_close(
            spline(t), torch.tensor([0.5, 2.0], dtype=torch.float64)
        )

    def test_extrapolate_zero(self):
        spline = self._spline("zero")
        t = torch.tensor([-1.0, 1.0, 4.0], dtype=torch.float64)
        torch.testing.assert_close(
            torchgausshermite.spline.b_spline_evaluate(spline, t),
            torch.tensor([0.0, 2.0, 0.0], dtype=torch.float64),
        )

    def test_extrapolate_clamp(self):
        spline = self._spline("clamp")
        t = torch.tensor([-1.0, 2.5, 4.0], dtype=torch.float64)
        torch.testing.assert_close(
            torchgausshermite.spline.b_spline_evaluate(spline, t),
            torch.tensor([0.0, 1.0, 0.0], dtype=torch.float64),
        )

    def test_extrapolate_error(self):
        spline = self._spline("error")
        with pytest.raises(torchgausshermite.spline.ExtrapolationError):
            torchgausshermite.spline.b_spline_evaluate(
                spline, torch.tensor([3.5], dtype=torch.float64)
            )

    def test_unknown_mode_raises(self):
        spline = self._spline("linear")
        with pytest.raises(ValueError):
            torchgausshermite.spline.b_spline_evaluate(
                spline, torch.tensor([1.0], dtype=torch.float64)
            )


class TestBSplineFit:
    def test_reproduces_cubic(self):
        grid = torch.linspace(0.0, 1.0, 5, dtype=torch.float64)
        x = torch.linspace(0.0, 1.0, 50, dtype=torch.float64)
        y = x**3 - x
        spline = torchgausshermite.spline.b_spline_fit(x, y, grid, degree=3)
        torch.testing.assert_close(
            torchgausshermite.spline.b_spline_evaluate(spline, x),
            y,
            atol=1e-10,
            rtol=1e-10,
        )

    def test_control_points_on_grid_basis(self):
        grid = torch.linspace(-2.0, 2.0, 9, dtype=torch.float64)
        x = torch.linspace(-2.0, 2.0, 80, dtype=torch.float64)
        y = 1.0 - x**2
        spline = torchgausshermite.spline.b_spline_fit(x, y, grid, degree=2)
        assert spline.control_points.shape == (grid.shape[0] + 1,)
        torch.testing.assert_close(
            spline.knots, torchgausshermite.spline.b_spline_knots(grid, 2)
        )
        torch.testing.assert_close(
            torchgausshermite.spline.b_spline_evaluate(spline, x),
            y,
            atol=1e-10,
            rtol=1e-10,
        )

    def test_vector_valued(self):
        grid = torch.linspace(0.0, 1.0, 4, dtype=torch.float64)
        x = torch.linspace(0.0, 1.0, 30, dtype=torch.float64)
        y = torch.stack([x, 2.0 * x - 1.0], dim=-1)
        spline = torchgausshermite.spline.b_spline_fit(x, y, grid, degree=1)
        assert spline.control_points.shape == (4, 2)

    def test_too_few_samples_raises(self):
        grid = torch.linspace(0.0, 1.0, 6, dtype=torch.float64)
        x = torch.linspace(0.0, 1.0, 4, dtype=torch.float64)
        with pytest.raises(ValueError):
            torchgausshermite.spline.b_spline_fit(x, x, grid, degree=3)

    def test_invalid_grid_raises(self):
        x = torch.linspace(0.0, 1.0, 10, dtype=torch.float64)
        grid = torch.tensor([0.0, 0.5, 0.5, 1.0], dtype=torch.float64)
        with pytest.raises(torchgausshermite.spline.KnotError):
            torchgausshermite.spline.b_spline_fit(x, x, grid, degree=1)
