import math

import pytest
import torch
import torch.testing

import torchgausshermite.quadrature


class TestGaussLegendreNodesWeights:
    @pytest.mark.parametrize("n", [1, 3, 7, 20])
    def test_weights_sum_to_two(self, n):
        _, weights = torchgausshermite.quadrature.gauss_legendre_nodes_weights(n)
        assert weights.sum().item() == pytest.approx(2.0, rel=1e-12)

    @pytest.mark.parametrize("n", [2, 5, 10])
    def test_exact_for_degree_2n_minus_1(self, n):
        nodes, weights = (
            torchgausshermite.quadrature.gauss_legendre_nodes_weights(n)
        )
        k = 2 * n - 2
        result = (weights * nodes**k).sum()
        assert result.item() == pytest.approx(2.0 / (k + 1), rel=1e-12)

    def test_nodes_sorted_and_symmetric(self):
        nodes, _ = torchgausshermite.quadrature.gauss_legendre_nodes_weights(6)
        assert torch.all(nodes[1:] > nodes[:-1])
        torch.testing.assert_close(nodes, -nodes.flip(0), atol=1e-13, rtol=0)


class TestGaussLegendre:
    def test_integrate(self):
        rule = torchgausshermite.quadrature.GaussLegendre(10)
        result = rule.integrate(torch.sin, 0.0, math.pi)
        assert result.item() == pytest.approx(2.0, rel=1e-12)

    def test_nodes_on_unit_interval(self):
        rule = torchgausshermite.quadrature.GaussLegendre(4)
        nodes, weights = rule.nodes_and_weights(0.0, 1.0)
        assert torch.all((nodes > 0) & (nodes < 1))
        assert weights.sum().item() == pytest.approx(1.0, rel=1e-12)

    def test_batched_bounds(self):
        rule = torchgausshermite.quadrature.GaussLegendre(5)
        a = torch.tensor([0.0, 1.0], dtype=torch.float64)
        b = torch.tensor([1.0, 3.0], dtype=torch.float64)
        nodes, weights = rule.nodes_and_weights(a, b)
        assert nodes.shape == (2, 5)
        torch.testing.assert_close(
            weights.sum(-1), b - a, atol=1e-12, rtol=1e-12
        )

    def test_invalid_n_raises(self):
        with pytest.raises(ValueError):
            torchgausshermite.quadrature.GaussLegendre(0)


class TestGaussKronrod:
    def test_embedded_gauss_rule(self):
        rule = torchgausshermite.quadrature.GaussKronrod(15)
        nodes, k_weights, g_weights, g_indices = rule.nodes_and_weights()
        assert nodes.shape == (15,)
        assert g_weights.shape == (7,)
        assert k_weights.sum().item() == pytest.approx(2.0, rel=1e-12)
        assert g_weights.sum().item() == pytest.approx(2.0, rel=1e-12)

        gauss_nodes, gauss_weights = (
            torchgausshermite.quadrature.gauss_legendre_nodes_weights(7)
        )
        torch.testing.assert_close(
            nodes[g_indices], gauss_nodes, atol=1e-12, rtol=1e-12
        )
        torch.testing.assert_close(
            g_weights, gauss_weights, atol=1e-12, rtol=1e-12
        )

    def test_only_order_15(self):
        with pytest.raises(ValueError):
            torchgausshermite.quadrature.GaussKronrod(21)
