"""Registry of special forms for the clove evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application.

Each handler is called as handler(operands, env, evaluate_fn, is_tail_call)
and must pass `is_tail_call` only to the operand whose value it returns.
"""

from clove.types.symbol import Symbol
from clove.evaluation.special_forms.define_form import define_form, defn_form
from clove.evaluation.special_forms.lambda_form import lambda_form
from clove.evaluation.special_forms.if_form import if_form
from clove.evaluation.special_forms.cond_form import cond_form
from clove.evaluation.special_forms.logic_forms import and_form, or_form, not_form
from clove.evaluation.special_forms.quote_form import quote_form
from clove.evaluation.special_forms.do_form import do_form
from clove.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    Symbol("def"): define_form,
    Symbol("defn"): defn_form,
    Symbol("fn"): lambda_form,
    Symbol("if"): if_form,
    Symbol("cond"): cond_form,
    Symbol("and"): and_form,
    Symbol("or"): or_form,
    Symbol("not"): not_form,
    Symbol("quote"): quote_form,
    Symbol("do"): do_form,
    Symbol("let"): let_form,
}
