import pytest

from clove.errors import ArityError, CloveSyntaxError, DivideByZeroError
from clove.evaluation.evaluator import evaluate
from clove.types.compound import List, Map, Vector
from clove.types.lambda_fn import Lambda
from clove.types.nil import Nil
from clove.types.symbol import Keyword, Symbol
from clove.types.var import Var


# -----------------------------------------------------
# Self-evaluating expressions and symbols
# -----------------------------------------------------

def test_self_evaluating_literals(env):
    assert evaluate(486, env) == 486
    assert evaluate(3.14, env) == 3.14
    assert evaluate("hello", env) == "hello"
    assert evaluate(True, env) is True
    assert evaluate(Nil, env) is Nil
    assert evaluate(Keyword("k"), env) == Keyword("k")
    assert evaluate(List(), env) == List()


def test_symbol_lookup(env):
    env.define(Symbol("size"), 2)
    assert evaluate(Symbol("size"), env) == 2


def test_collection_literals_evaluate_their_elements(interp):
    assert interp.eval("[(+ 1 1) 3]") == Vector((2, 3))
    assert interp.eval("{:a (+ 1 2)}") == Map({Keyword("a"): 3}.items())
    assert interp.eval("#{(inc 1)}") == {2}


# -----------------------------------------------------
# def / fn / defn
# -----------------------------------------------------

def test_def_and_square(interp):
    var = interp.eval("(def square (fn [x] (* x x)))")
    assert isinstance(var, Var)
    assert var.symbol == Symbol("square")
    assert isinstance(var.value, Lambda)
    assert interp.eval("(square 21)") == 441
    assert interp.eval("(square (square 3))") == 81


def test_def_names_anonymous_fn(interp):
    interp.eval("(def square (fn [x] (* x x)))")
    assert interp.eval("square").name == "square"


def test_def_without_value_binds_nil(interp):
    interp.eval("(def pending)")
    assert interp.eval("pending") is Nil


def test_def_with_docstring(interp):
    interp.eval('(def pi "ratio of circumference to diameter" 3.14159)')
    assert interp.eval("pi") == 3.14159


def test_def_overwrites_global_binding(interp):
    interp.eval("(def size 2)")
    interp.eval("(def size 5)")
    assert interp.eval("(* 5 size)") == 25


def test_defn_sum_of_squares(interp):
    interp.eval("""
        (defn square [x] (* x x))
        (defn sum-of-squares [x y] (+ (square x) (square y)))
        (defn f [a] (sum-of-squares (+ a 1) (* a 2)))
    """)
    assert interp.eval("(sum-of-squares 3 4)") == 25
    assert interp.eval("(f 5)") == 136


def test_defn_with_docstring_and_multiple_body_forms(interp):
    interp.eval('(defn twice "calls g twice" [g x] (g x) (g (g x)))')
    assert interp.eval("(twice inc 1)") == 3


def test_def_inside_fn_binds_globally(interp):
    interp.eval("(defn setter [] (def g 42))")
    interp.eval("(setter)")
    assert interp.eval("g") == 42


def test_def_does_not_touch_local_bindings(interp):
    assert interp.eval("(let [y 1] (def y 2) y)") == 1
    assert interp.eval("y") == 2


def test_fn_body_is_not_evaluated_at_creation(interp):
    assert isinstance(interp.eval("(fn [] (/ 1 0))"), Lambda)
    with pytest.raises(DivideByZeroError):
        interp.eval("((fn [] (/ 1 0)))")


def test_fn_with_empty_body_returns_nil(interp):
    assert interp.eval("((fn []))") is Nil


def test_closures_capture_defining_environment(interp):
    interp.eval("""
        (defn make-adder [n] (fn [x] (+ x n)))
        (def add5 (make-adder 5))
        (def add10 (make-adder 10))
    """)
    assert interp.eval("(add5 10)") == 15
    assert interp.eval("(add10 10)") == 20


def test_closures_ignore_call_site_bindings(interp):
    interp.eval("(def x 10)")
    interp.eval("(defn f [] x)")
    assert interp.eval("(let [x 20] (f))") == 10


def test_named_fn_can_recur_on_itself(interp):
    assert interp.eval("((fn fact [n] (if (= n 0) 1 (* n (fact (- n 1))))) 5)") == 120


def test_variadic_fn(interp):
    assert interp.eval("((fn [a & more] more) 1 2 3)") == List((2, 3))
    assert interp.eval("((fn [& xs] xs))") is Nil
    assert interp.eval("((fn [& xs] (apply + xs)) 1 2 3 4)") == 10


def test_compound_arity_error(interp):
    interp.eval("(defn pair [a b] a)")
    with pytest.raises(ArityError, match="pair"):
        interp.eval("(pair 1)")
    with pytest.raises(ArityError, match="pair"):
        interp.eval("(pair 1 2 3)")


@pytest.mark.parametrize(
    "source",
    ["(fn x)", "(fn (x) x)", "(fn)", "(def 1 2)", "(def a 1 2)", "(defn f x)", "(defn 1 [] 2)", "(fn [x &] x)"],
)
def test_malformed_definitions(interp, source):
    with pytest.raises(CloveSyntaxError):
        interp.eval(source)


# -----------------------------------------------------
# if / cond
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if true 1 2)", 1),
        ("(if false 1 2)", 2),
        ("(if nil 1 2)", 2),
        ("(if 0 :zero :other)", Keyword("zero")),
        ('(if "" :empty :other)', Keyword("empty")),
        ("(if (= (count \"three\") 3) :no-consequent)", Nil),
        ("(if (= (count \"three\") 5) :five)", Keyword("five")),
    ],
)
def test_if(interp, source, expected):
    assert interp.eval(source) == expected


def test_if_evaluates_only_the_chosen_branch(interp):
    assert interp.eval("(if true :ok (/ 1 0))") == Keyword("ok")
    assert interp.eval("(if false (/ 1 0) :ok)") == Keyword("ok")


@pytest.mark.parametrize("source", ["(if)", "(if true)", "(if true 1 2 3)"])
def test_if_wrong_shape(interp, source):
    with pytest.raises(CloveSyntaxError):
        interp.eval(source)


def test_cond_abs(interp):
    interp.eval("""
        (defn abs* [x]
          (cond (> x 0) x
                (= x 0) 0
                (< x 0) (- x)))
    """)
    assert [interp.eval(f"(abs* {n})") for n in (-3, 0, 4)] == [3, 0, 4]


def test_cond_else_is_a_catchall_only_when_last(interp):
    interp.eval("(defn abs* [x] (cond (< x 0) (- x) :else x))")
    assert interp.eval("(abs* -2)") == 2
    assert interp.eval("(abs* 2)") == 2
    # An earlier truthy test wins, wherever :else appears.
    assert interp.eval("(cond :first 1 :else 2)") == 1
    assert interp.eval("(cond false 1 :else 2 true 3)") == 2


def test_cond_without_match_is_nil(interp):
    assert interp.eval("(cond false 1 nil 2)") is Nil
    assert interp.eval("(cond)") is Nil


def test_cond_stops_at_first_truthy_test(interp):
    assert interp.eval("(cond true :a (/ 1 0) :b)") == Keyword("a")


def test_cond_odd_forms(interp):
    with pytest.raises(CloveSyntaxError):
        interp.eval("(cond true)")


# -----------------------------------------------------
# and / or / not
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(and (= 1 2) (/ 1 0))", False),
        ("(or (= 1 1) (/ 1 0))", True),
        ("(or (= 0 1) :truthy)", Keyword("truthy")),
        ("(and)", True),
        ("(or)", False),
        ("(and 1 2 3)", 3),
        ("(and 1 nil 2)", Nil),
        ("(or nil false)", False),
        ("(or false nil)", Nil),
        ("(or nil 0)", 0),
        ("(not nil)", True),
        ("(not false)", True),
        ("(not 0)", False),
        ("(not (= 1 1))", False),
    ],
)
def test_logic(interp, source, expected):
    result = interp.eval(source)
    assert result == expected
    assert type(result) is type(expected)


def test_and_evaluates_past_truthy_operands(interp):
    with pytest.raises(DivideByZeroError):
        interp.eval("(and (= 1 1) (/ 1 0))")


def test_or_evaluates_past_falsy_operands(interp):
    with pytest.raises(DivideByZeroError):
        interp.eval("(or false (/ 1 0))")


def test_not_arity(interp):
    with pytest.raises(ArityError, match="not"):
        interp.eval("(not 1 2)")


# -----------------------------------------------------
# quote / do / let
# -----------------------------------------------------

def test_quote(interp):
    assert interp.eval("'(1 2)") == List((1, 2))
    assert interp.eval("(quote x)") == Symbol("x")
    assert interp.eval("'(undefined (stuff))") == List((Symbol("undefined"), List((Symbol("stuff"),))))


def test_do(interp):
    assert interp.eval("(do 1 2 3)") == 3
    assert interp.eval("(do)") is Nil
    assert interp.eval("(do (def a 1) (+ a 1))") == 2


def test_let_is_sequential_and_scoped(interp):
    assert interp.eval("(let [a 1 b (+ a 1)] (* a b))") == 2
    assert interp.eval("(let [x 3] (let [x (* x x)] x))") == 9
    assert interp.eval("(let [] 5)") == 5


@pytest.mark.parametrize("source", ["(let [a] a)", "(let (a 1) a)", "(let [1 2] 3)"])
def test_let_wrong_shape(interp, source):
    with pytest.raises(CloveSyntaxError):
        interp.eval(source)
