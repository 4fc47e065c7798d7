"""
Tests for the one-dimensional models, fit results and the likelihood.

Tests:
    1. Gaussian and Exponential densities
    2. Model setters and accessors
    3. FitResult construction
    4. Unbinned likelihood
    5. Efficiency functions and the accept-reject controller
"""
import logging
import math

import pytest

from pdffit import (
    EnvelopeWarning,
    Exponential,
    FitResult,
    Function,
    Gaussian,
    Parameter,
    Pdf,
    PdfError,
    Sampler,
    UnbinnedLikelihood,
    Variable,
)
from pdffit.logging_config import configure_logging
from pdffit.unweighting import UnweightingController


def _gauss(mu=1.0, sigma=0.2):
    return Gaussian(Variable("x", mu), Parameter("mu", mu), Parameter("sigma", sigma))


# ------------------------------- Models -----------------------------------
def test_gaussian_at_mean():
    model = _gauss(sigma=0.5)
    assert model.evaluate() == pytest.approx(1.0 / (math.sqrt(2.0 * math.pi) * 0.5))
    assert model.evaluate_at([1.5]) == pytest.approx(model.evaluate() * math.exp(-0.5))


def test_exponential_is_normalised():
    model = Exponential(Variable("t"), Parameter("lam", 1.5), 0.0, 2.0)
    n = 2000
    width = 2.0 / n
    total = sum(model.evaluate_at([(i + 0.5) * width]) for i in range(n)) * width
    assert total == pytest.approx(1.0, rel=1e-6)
    assert model.evaluate_at([3.0]) == 0.0


def test_exponential_without_slope_is_uniform():
    model = Exponential(Variable("t"), Parameter("lam", 0.0), 1.0, 5.0)
    assert model.evaluate_at([2.0]) == pytest.approx(0.25)


def test_exponential_recomputes_norm_on_set_par():
    model = Exponential(Variable("t"), Parameter("lam", 0.0), 0.0, 1.0)
    model.set_par("lam", 1.0)
    assert model.evaluate_at([0.0]) == pytest.approx(1.0 / (1.0 - math.exp(-1.0)))


def test_exponential_invalid_range():
    with pytest.raises(ValueError):
        Exponential(Variable("t"), Parameter("lam", 1.0), 2.0, 1.0)


def test_model_copies_named_values():
    x = Variable("x", 1.0)
    mu = Parameter("mu", 1.0)
    model = Gaussian(x, mu, Parameter("sigma", 0.2))
    model.set_var("x", 2.0)
    model.set_par("mu", 3.0)
    assert x.value == 1.0
    assert mu.value == 1.0


def test_model_accessors():
    model = _gauss()
    assert model.var_names() == ["x"]
    assert model.par_names() == ["mu", "sigma"]
    assert model.depends_on("x")
    assert not model.depends_on("mu")
    with pytest.raises(PdfError):
        model.get_var("y")
    with pytest.raises(PdfError):
        model.get_par("nope")


def test_model_setters_accept_sequences_and_mappings():
    model = _gauss()
    model.set_pars([2.0, 0.5])
    assert model.get_par("mu").value == 2.0
    assert model.get_par("sigma").value == 0.5

    model.set_pars({"mu": 1.0, "unrelated": 4.0})
    assert model.get_par("mu").value == 1.0

    with pytest.raises(PdfError, match="Number of arguments"):
        model.set_pars([1.0])
    with pytest.raises(PdfError, match="Number of arguments"):
        model.evaluate_at([1.0, 2.0])
    with pytest.raises(PdfError, match="Missing values"):
        model.evaluate_at({"y": 1.0})


def test_model_copy_is_independent():
    model = _gauss()
    clone = model.copy()
    clone.set_par("mu", 5.0)
    assert model.get_par("mu").value == 1.0


# ----------------------------- Fit results --------------------------------
def test_fit_result_from_vector():
    result = FitResult.from_vector(["a", "b"], [1.0, 2.0], [0.1, 0.2], fval=3.5)
    assert result.names() == ["a", "b"]
    assert result.value("b") == 2.0
    assert result.error("a") == 0.1
    assert result.fval == 3.5
    assert "a" in result
    assert "c" not in result


def test_fit_result_from_parameters():
    result = FitResult.from_parameters([Parameter("mu", 1.0, 0.1)])
    par = result.parameters()["mu"]
    assert (par.value, par.error) == (1.0, 0.1)
    assert result.error("missing") == 0.0


# ----------------------------- Likelihood ---------------------------------
def test_likelihood_is_lowest_near_the_truth():
    data = [[0.8], [0.9], [1.0], [1.1], [1.2]]
    nll = UnbinnedLikelihood(_gauss(), data)
    assert nll.par_names() == ["mu", "sigma"]

    at_truth = nll([1.0, 0.2])
    assert at_truth < nll([1.2, 0.2])
    assert at_truth < nll([0.8, 0.2])
    assert nll.calls == 3


def test_likelihood_on_pdf_expression():
    model = _gauss()
    pdf = Pdf(model) * Parameter("scale", 1.0)
    nll = UnbinnedLikelihood(pdf, [[1.0]])

    value = nll([1.0, 1.0, 0.2])  # mu, scale, sigma
    expected = -2.0 * math.log(1.0 / (math.sqrt(2.0 * math.pi) * 0.2))
    assert value == pytest.approx(expected)
    assert model.get_par("sigma").value == 0.2


def test_likelihood_is_infinite_outside_support():
    model = Exponential(Variable("t"), Parameter("lam", 1.0), 0.0, 1.0)
    nll = UnbinnedLikelihood(model, [[0.5], [2.0]])
    assert nll([1.0]) == math.inf


def test_likelihood_checks_columns():
    with pytest.raises(ValueError):
        UnbinnedLikelihood(_gauss(), [[1.0, 2.0]])


def test_likelihood_result_feeds_back_into_the_model():
    model = _gauss()
    nll = UnbinnedLikelihood(model, [[1.0]])
    model.set_pars(nll.result([1.1, 0.3], errors=[0.01, 0.02], fval=1.0))
    assert model.get_par("mu").value == 1.1
    assert model.get_par("sigma").error == 0.02


# ------------------------------ Functions ---------------------------------
def test_function_merges_variables_and_parameters():
    func = Function(
        [Variable("x")],
        [Parameter("k", 2.0)],
        lambda v: v["k"] * v["x"],
        name="linear",
    )
    assert func.evaluate({"x": 3.0, "y": 10.0}) == 6.0
    func.set_par("k", 3.0)
    assert func.evaluate({"x": 3.0}) == 9.0

    with pytest.raises(PdfError):
        func.evaluate({"y": 1.0})
    with pytest.raises(PdfError):
        func.set_par("nope", 1.0)


def test_function_needs_a_formula():
    with pytest.raises(ValueError):
        Function([Variable("x")])


# --------------------------- Accept-reject --------------------------------
def test_controller_counts_and_efficiency():
    controller = UnweightingController(1.0)
    sampler = Sampler(seed=11)
    for _ in range(200):
        controller.accept(1.0, sampler)
    controller.reject()
    assert controller.accepted == 200
    assert controller.rejected == 1
    assert controller.efficiency == pytest.approx(200 / 201)


def test_controller_reports_violations(caplog):
    seen = []
    controller = UnweightingController(1.0, on_violation=lambda w, w_max: seen.append(w))
    with caplog.at_level(logging.ERROR), pytest.warns(EnvelopeWarning):
        assert not controller.check_envelope(2.0)
    assert controller.check_envelope(0.5)
    assert controller.violations == 1
    assert seen == [2.0]
    assert "Envelope too low" in caplog.text


def test_controller_rejects_non_positive_envelope():
    with pytest.raises(ValueError):
        UnweightingController(0.0)


def test_configure_logging_sets_level():
    configure_logging(logging.DEBUG)
    assert logging.getLogger().handlers
