import math

import pytest
import torch
import torch.testing

import torchgausshermite.gauss_hermite


def gaussian(amplitude, center, width):
    def f(x):
        y = (x - center) / width
        return amplitude * torch.exp(-0.5 * y**2) / (width * math.sqrt(2 * math.pi))

    return f


class TestGaussHermiteFitter:
    def test_nodes(self):
        fitter = torchgausshermite.gauss_hermite.GaussHermiteFitter(
            gaussian(1.0, 0.0, 1.0), 2
        )
        assert fitter.num_residuals == 99
        assert fitter.num_parameters == 3
        assert fitter.y[0].item() == pytest.approx(-7.0)
        assert fitter.y[49].item() == 0.0
        assert fitter.y[-1].item() == pytest.approx(7.0)

    def test_residuals_vanish_at_solution(self):
        fitter = torchgausshermite.gauss_hermite.GaussHermiteFitter(
            gaussian(2.0, 1.0, 0.5), 4
        )
        params = torch.tensor([2.0, 1.0, 0.5, 0.0, 0.0], dtype=torch.float64)
        torch.testing.assert_close(
            fitter.residuals(params),
            torch.zeros(99, dtype=torch.float64),
            atol=1e-14,
            rtol=0,
        )

    def test_jacobian_matches_autograd_at_solution(self):
        fitter = torchgausshermite.gauss_hermite.GaussHermiteFitter(
            gaussian(2.0, 1.0, 0.5), 4
        )
        params = torch.tensor([2.0, 1.0, 0.5, 0.0, 0.0], dtype=torch.float64)
        result = fitter.jacobian(params)
        expected = torch.func.jacrev(fitter.residuals)(params)
        assert result.shape == (99, 5)
        torch.testing.assert_close(result, expected, atol=1e-12, rtol=1e-10)

    def test_shape_jacobian_matches_autograd(self):
        """The shape columns are exact away from the solution too."""
        fitter = torchgausshermite.gauss_hermite.GaussHermiteFitter(
            gaussian(2.0, 1.0, 0.5), 5
        )
        params = torch.tensor(
            [1.5, 0.8, 0.7, 0.1, -0.05, 0.02], dtype=torch.float64
        )
        result = fitter.jacobian(params)
        expected = torch.func.jacrev(fitter.residuals)(params)
        torch.testing.assert_close(
            result[:, [0, 3, 4, 5]], expected[:, [0, 3, 4, 5]]
        )

    def test_order_below_two_raises(self):
        with pytest.raises(torchgausshermite.gauss_hermite.GaussHermiteError):
            torchgausshermite.gauss_hermite.GaussHermiteFitter(
                gaussian(1.0, 0.0, 1.0), 1
            )


class TestGaussHermiteFit:
    def test_recovers_gaussian(self):
        result = torchgausshermite.gauss_hermite.gauss_hermite_fit(
            gaussian(2.0, 1.0, 0.5), [2.3, 0.85, 0.6]
        )
        assert result.converged
        torch.testing.assert_close(
            result.x,
            torch.tensor([2.0, 1.0, 0.5], dtype=torch.float64),
            atol=1e-5,
            rtol=1e-5,
        )

    def test_shape_terms_vanish_for_gaussian(self):
        result = torchgausshermite.gauss_hermite.gauss_hermite_fit(
            gaussian(1.0, -0.5, 2.0), [1.1, -0.3, 1.8], fit_order=5
        )
        assert result.x.shape == (6,)
        torch.testing.assert_close(
            result.x,
            torch.tensor([1.0, -0.5, 2.0, 0.0, 0.0, 0.0], dtype=torch.float64),
            atol=1e-5,
            rtol=1e-5,
        )

    def test_accepts_moments(self):
        f = gaussian(1.0, 0.0, 1.0)
        moments = torchgausshermite.gauss_hermite.classic_moments(f)
        result = torchgausshermite.gauss_hermite.gauss_hermite_fit(f, moments)
        assert result.converged
        assert result.x[2].item() == pytest.approx(1.0, rel=1e-5)

    def test_maxiter(self):
        result = torchgausshermite.gauss_hermite.gauss_hermite_fit(
            gaussian(2.0, 1.0, 0.5), [3.0, 0.0, 1.5], maxiter=1
        )
        assert not result.converged

    @pytest.mark.parametrize("width", [0.0, -1.0, float("nan")])
    def test_invalid_initial_width_raises(self, width):
        with pytest.raises(torchgausshermite.gauss_hermite.GaussHermiteError):
            torchgausshermite.gauss_hermite.gauss_hermite_fit(
                gaussian(1.0, 0.0, 1.0), [1.0, 0.0, width]
            )

    def test_invalid_fit_order_raises(self):
        with pytest.raises(torchgausshermite.gauss_hermite.GaussHermiteError):
            torchgausshermite.gauss_hermite.gauss_hermite_fit(
                gaussian(1.0, 0.0, 1.0), [1.0, 0.0, 1.0], fit_order=0
            )
