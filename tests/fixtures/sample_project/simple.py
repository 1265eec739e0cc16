"""Simple module."""


def add(a, b):
    return a + b


def greet(name):
    # say hello
    return "hello " + name
