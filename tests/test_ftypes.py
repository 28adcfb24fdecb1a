from cart_decoder.ftypes import Maybe, Either
from cart_decoder.compose import pipe, chain


# ТЕСТЫ Maybe
def test_maybe_lookup_distinguishes_null_from_missing():
    found = Maybe.lookup({"email": None}, "email")
    missing = Maybe.lookup({}, "email")

    assert found.present
    assert found.value is None
    assert not missing.present


def test_maybe_to_either():
    assert Maybe.some(1).to_either("err").value == 1
    left = Maybe.nothing().to_either("err")
    assert left.is_left
    assert left.value == "err"


# ТЕСТЫ Either
def test_either_map_and_bind():
    val = Either.right(5)
    assert val.map(lambda x: x * 2).value == 10
    assert val.bind(lambda x: Either.right(x + 3)).value == 8

    err = Either.left("boom")
    assert err.map(lambda x: x * 2) is err
    assert err.bind(lambda x: Either.right(x)) is err


def test_either_sequence_keeps_order_and_stops_at_first_left():
    ok = Either.sequence([Either.right(1), Either.right(2), Either.right(3)])
    assert ok.is_right
    assert ok.value == (1, 2, 3)

    seen = []

    def items():
        for i, e in enumerate([Either.right(1), Either.left("first"), Either.left("second")]):
            seen.append(i)
            yield e

    failed = Either.sequence(items())
    assert failed.is_left
    assert failed.value == "first"
    assert seen == [0, 1]


def test_either_sequence_empty():
    assert Either.sequence([]).value == ()


# ТЕСТЫ композиции
def test_pipe_and_chain():
    def f(x):
        return x + 1

    def g(x):
        return x * 2

    assert pipe(f, g)(3) == 8

    half = lambda x: Either.right(x // 2) if x % 2 == 0 else Either.left(f"odd {x}")
    run = chain(lambda x: Either.right(x), half, half)

    assert run(8).value == 2
    assert run(6).value == "odd 3"
