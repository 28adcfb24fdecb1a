from functools import reduce


def pipe(*funcs):
    """pipe(f, g, h)(x) == h(g(f(x)))"""
    return reduce(lambda f, g: lambda x: g(f(x)), funcs)


def chain(first, *stages):
    """
    Цепочка стадий, возвращающих Either:
    chain(f, g, h)(x) == f(x).bind(g).bind(h)
    Первая же Left-стадия прерывает цепочку.
    """
    return pipe(first, *(lambda result, stage=stage: result.bind(stage) for stage in stages))
