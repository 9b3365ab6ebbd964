"""Fixture classes exercised by the test suite."""
from __future__ import annotations

import sys
import threading

import numpy as np


class CustomError(Exception):
    pass


class Calculator:
    def add(self):
        return 1 + 1

    def answer(self):
        return 42

    def vector(self):
        return np.arange(3)

    def bad_input(self):
        raise ValueError("this is bad input")

    def custom(self):
        raise CustomError("custom failure")

    def missing(self):
        raise KeyError("missing")

    def nothing(self):
        return None

    def recover(self, exc):
        return f"recovered from {type(exc).__name__}"

    def broken_handler(self, exc):
        raise RuntimeError("handler failed")

    def uncomparable(self):
        return Uncomparable()

    @staticmethod
    def static_answer():
        return 42

    @classmethod
    def owner_name(cls):
        return cls.__name__


class Uncomparable:
    def __eq__(self, other):
        raise TypeError("cannot compare")

    __hash__ = object.__hash__


class BaseFixture:
    def shared(self):
        return "base"

    def overridden(self):
        return "base"


class DerivedFixture(BaseFixture):
    def overridden(self):
        return "derived"

    def own(self):
        return "own"


class Slow:
    release = threading.Event()

    def blocks(self):
        Slow.release.wait(5)
        return "finished"

    def quick(self):
        return "done"

    def thread_name(self):
        return threading.current_thread().name


class BrokenInit:
    def __init__(self):
        raise RuntimeError("no fixture for you")

    def anything(self):
        return None


class Exits:
    def quits(self):
        sys.exit(3)

    def fine(self):
        return "fine"
