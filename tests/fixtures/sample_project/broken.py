def first(x):
    if x:
        return 1
    return 0


def broken(:
    pass


def last(items):
    return [i for i in items]
