"""
Tests for the Pdf expression engine.

Tests:
    1. Postfix evaluation matches direct arithmetic
    2. Add / multiply legality rules
    3. Value propagation by name (single and positional setters)
    4. Stateless evaluation at an explicit point
    5. Shared-variable analysis (common_vars)
    6. Malformed programs raise parse errors
"""
import math

import pytest

from pdffit import Op, Parameter, Pdf, PdfError
from pdffit.parameter_expr import exp
from pdffit.program import BinOp, ModelRef, ParamRef

from conftest import StubModel


def _assert_close(a, b, tol=1e-12, msg=""):
    assert abs(a - b) < tol, msg or f"Values differ: {a} vs {b} (tol={tol})"


# ----------------------------- Evaluation ---------------------------------
def test_sum_times_parameter_matches_direct_arithmetic():
    a = StubModel(["x", "y"], offset=1.0)
    b = StubModel(["y", "x"], offset=2.0)
    p = Parameter("p", 3.0)

    pdf = (a + b) * p
    pdf.set_vars([0.5, 0.25])  # x, y

    _assert_close(a.evaluate(), 1.75)
    _assert_close(b.evaluate(), 2.75)
    _assert_close(pdf.evaluate(), a.evaluate() * 3.0 + b.evaluate() * 3.0)


def test_program_layout_is_postfix():
    a = StubModel(["x"])
    b = StubModel(["x"])
    pdf = (a + b) * Parameter("p", 2.0)

    kinds = [type(instr) for instr in pdf.program]
    assert kinds == [ModelRef, ModelRef, BinOp, ParamRef, BinOp]
    assert pdf.program[2].op is Op.PLUS
    assert pdf.program[4].op is Op.MULT
    assert len(pdf) == 5


def test_division_and_constants():
    a = StubModel(["x"], offset=4.0)
    pdf = Pdf(a) / 2.0
    pdf *= Parameter("k", 5.0)
    pdf /= Parameter("d", 10.0)
    _assert_close(pdf.evaluate(), 4.0 / 2.0 * 5.0 / 10.0)


def test_parameter_lookup_uses_current_value():
    a = StubModel(["x"], offset=1.0)
    pdf = Pdf(a) * Parameter("p", 2.0)
    pdf.set_par("p", 7.0)
    _assert_close(pdf.evaluate(), 7.0)


def test_parameter_expression_with_unary_operation():
    a = StubModel(["x"], offset=1.0)
    frac = Parameter("f", 0.0)
    pdf = a * exp(frac) + a * (1 - frac)
    _assert_close(pdf.evaluate(), math.exp(0.0) + 1.0)

    pdf.set_par("f", 0.5)
    _assert_close(pdf.evaluate(), math.exp(0.5) + 0.5)


def test_pdf_references_models_without_copying():
    a = StubModel(["x"])
    b = StubModel(["y"])
    pdf = a * b
    assert pdf.models[0] is a
    assert pdf.models[1] is b

    a.offset = 10.0
    _assert_close(pdf.evaluate(), 10.0 * 1.0)


# ------------------------------ Legality ----------------------------------
def test_add_requires_same_variables():
    with pytest.raises(PdfError, match="same variables"):
        StubModel(["x", "y"]) + StubModel(["x"])


def test_add_with_same_variables_in_any_order():
    pdf = StubModel(["x", "y"]) + StubModel(["y", "x"])
    assert pdf.var_names() == ["x", "y"]


def test_multiply_requires_disjoint_variables():
    with pytest.raises(PdfError, match="common variable"):
        StubModel(["x", "y"]) * StubModel(["y", "z"])


def test_multiply_with_disjoint_variables():
    pdf = StubModel(["x", "y"]) * StubModel(["z"])
    assert pdf.var_names() == ["x", "y", "z"]


def test_inplace_operators_check_the_same_rules():
    pdf = Pdf(StubModel(["x"]))
    pdf += StubModel(["x"])
    with pytest.raises(PdfError):
        pdf += StubModel(["y"])
    pdf *= StubModel(["y"])
    with pytest.raises(PdfError):
        pdf *= StubModel(["x"])


def test_model_by_model_division_is_not_supported():
    with pytest.raises(TypeError):
        Pdf(StubModel(["x"])) / StubModel(["y"])


def test_non_inplace_operators_leave_operand_unchanged():
    pdf = Pdf(StubModel(["x"]))
    scaled = pdf * 2.0
    assert len(pdf) == 1
    assert len(scaled) == 3


# ----------------------------- Propagation --------------------------------
def test_set_var_propagates_value_and_error():
    a = StubModel(["x", "y"])
    d = StubModel(["x", "y"])
    c = StubModel(["z"])
    pdf = (a + d) * c

    pdf.set_var("x", 5.0, 0.1)

    for model in (a, d):
        assert model.get_var("x").value == 5.0
        assert model.get_var("x").error == 0.1
    assert "x" not in c.var_map
    assert pdf.get_var("x").value == 5.0


def test_set_unknown_name_raises():
    pdf = Pdf(StubModel(["x"], parameters=[Parameter("p", 1.0)]))
    with pytest.raises(PdfError, match="unexisting variable"):
        pdf.set_var("nope", 1.0)
    with pytest.raises(PdfError, match="unexisting parameter"):
        pdf.set_par("nope", 1.0)


def test_positional_setters_check_arity():
    pdf = StubModel(["x"]) * StubModel(["y"])
    with pytest.raises(PdfError, match="Number of arguments"):
        pdf.set_vars([1.0])
    with pytest.raises(PdfError, match="Number of arguments"):
        pdf.set_pars([1.0])


def test_set_pars_propagates_by_name_and_cache_reaches_models():
    a = StubModel(["x"], parameters=[Parameter("a", 1.0), Parameter("shared", 1.0)])
    b = StubModel(["y"], parameters=[Parameter("shared", 1.0)])
    pdf = a * b
    assert pdf.par_names() == ["a", "shared"]

    pdf.set_pars([2.0, 3.0])
    assert a.get_par("a").value == 2.0
    assert a.get_par("shared").value == 3.0
    assert b.get_par("shared").value == 3.0

    pdf.cache()
    assert a.cache_calls == 1
    assert b.cache_calls == 1


def test_set_vars_uses_sorted_name_order():
    a = StubModel(["b", "a"], offset=0.0)
    pdf = Pdf(a)
    pdf.set_vars([1.0, 2.0])
    assert a.get_var("a").value == 1.0
    assert a.get_var("b").value == 2.0


# ------------------------- Evaluation at a point --------------------------
def test_evaluate_at_projects_point_onto_each_model():
    a = StubModel(["x", "z"], offset=0.0)
    b = StubModel(["y"], offset=1.0)
    pdf = a * b

    value = pdf.evaluate_at([1.0, 2.0, 3.0])  # x, y, z
    _assert_close(value, (1.0 + 3.0) * (1.0 + 2.0))

    # stored values untouched
    assert a.get_var("x").value == 0.0
    assert b.get_var("y").value == 0.0


def test_evaluate_at_checks_arity():
    pdf = Pdf(StubModel(["x", "y"]))
    with pytest.raises(PdfError, match="Number of arguments"):
        pdf.evaluate_at([1.0])


# ----------------------------- common_vars --------------------------------
def test_common_vars_of_product_is_union():
    pdf = StubModel(["x", "y"]) * StubModel(["z"])
    assert pdf.common_vars() == ["x", "y", "z"]


def test_common_vars_of_sum_is_shared_set():
    pdf = StubModel(["x", "y"]) + StubModel(["y", "x"])
    assert pdf.common_vars() == ["x", "y"]


def test_common_vars_with_scaled_terms():
    frac = Parameter("f", 0.3)
    a = StubModel(["x", "y"])
    b = StubModel(["x", "y"])
    pdf = (a * frac + b * (1 - frac)) * StubModel(["t"])
    assert pdf.common_vars() == ["t", "x", "y"]


# ---------------------------- Parse errors --------------------------------
def test_binary_operation_without_operands_raises():
    pdf = Pdf(StubModel(["x"]))
    pdf.append(Op.PLUS)
    with pytest.raises(PdfError, match="not enough values"):
        pdf.evaluate()
    with pytest.raises(PdfError, match="not enough values"):
        pdf.common_vars()


def test_leftover_values_raise():
    pdf = Pdf(StubModel(["x"]))
    pdf.append(StubModel(["y"]))
    with pytest.raises(PdfError, match="too many values"):
        pdf.evaluate()
    with pytest.raises(PdfError, match="too many values"):
        pdf.common_vars()


def test_empty_program_raises():
    with pytest.raises(PdfError):
        Pdf().evaluate()


def test_unknown_binary_operation_raises():
    pdf = Pdf(StubModel(["x"]))
    pdf.append(2.0)
    pdf.append(Op.EXP)
    with pytest.raises(PdfError, match="unknown binary operation"):
        pdf.evaluate()
