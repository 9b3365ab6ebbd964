"""Example fixtures; run with ``casekit run examples/vector_math/fixtures.py``."""
import time

import numpy as np

from casekit import category, expected_exception, expected_result, test, timeout


class VectorMath:
    @expected_result(np.array([5.0, 7.0, 9.0]))
    def adds_elementwise(self):
        return np.add([1.0, 2.0, 3.0], [4.0, 5.0, 6.0])

    @expected_exception(ValueError, message="operands could not be broadcast", match="startswith")
    def rejects_mismatched_shapes(self):
        return np.add(np.ones(2), np.ones(3))

    @expected_exception(ZeroDivisionError, handler="log_failure")
    def divides_by_zero(self):
        return 1 / 0

    @category("slow")
    @timeout(100)
    @test
    def exceeds_timeout(self):
        time.sleep(0.5)

    def log_failure(self, exc):
        print(f"handled {type(exc).__name__}")


@timeout(1000)
class BoundedVectorMath(VectorMath):
    @expected_result(6.0)
    def sums(self):
        return float(np.sum([1.0, 2.0, 3.0]))
